from sqlalchemy.orm import Session

from app.db.session import SessionLocal, init_db
from app.services.conversation_store import ConversationStore
from app.services.user_directory import UserDirectory
from app.services.verification_service import VerificationService

SEED_PASSWORD = "senha123"

SEED_USERS = [
    {
        "name": "Maria Silva",
        "email": "maria@example.com",
        "mother_age": 32,
        "child_age_range": "3-5",
        "work_hours": "08:00-17:00",
        "location": "São Paulo, SP",
        "available_to_babysit": True,
        "availability_hours": "18:00-22:00",
        "children": [
            {"name": "Lucas", "age": 4, "screen_restricted": True,
             "activities": ["Leitura", "Música", "Brincadeiras ao ar livre"]},
        ],
    },
    {
        "name": "Ana Souza",
        "email": "ana@example.com",
        "mother_age": 28,
        "child_age_range": "3-5",
        "work_hours": "09:00-18:00",
        "location": "São Paulo, SP",
        "children": [
            {"name": "Julia", "age": 5, "screen_restricted": True,
             "activities": ["Música", "Desenho/Pintura"]},
        ],
    },
    {
        "name": "Fernanda Lima",
        "email": "fernanda@example.com",
        "mother_age": 35,
        "child_age_range": "6-8",
        "work_hours": "07:00-15:00",
        "location": "Campinas, SP",
        "available_to_babysit": True,
        "availability_hours": "15:00-19:00",
        "children": [
            {"name": "Pedro", "age": 7, "screen_restricted": False,
             "activities": ["Esportes", "Jogos educativos"]},
            {"name": "Sofia", "age": 4, "screen_restricted": True,
             "activities": ["Artesanato", "Leitura"]},
        ],
    },
    # no questionnaire, scores 0 against everyone
    {
        "name": "Carla Mendes",
        "email": "carla@example.com",
        "mother_age": 30,
        "child_age_range": "0-2",
        "work_hours": "10:00-19:00",
        "location": "Santos, SP",
        "children": [],
    },
]


def seed(db: Session):
    directory = UserDirectory()
    verification = VerificationService()

    created = []
    for entry in SEED_USERS:
        data = dict(entry)
        children = data.pop("children")
        if directory.get_user_by_email(db, data["email"]):
            continue

        user = directory.create_user(db, password=SEED_PASSWORD, **data)
        if children:
            verification.submit(
                db,
                user_id=user.id,
                rg=f"RG-{len(created) + 1:04d}",
                cpf=f"000.000.000-{len(created) + 1:02d}",
                children=children,
            )
        created.append(user)

    if len(created) >= 2:
        store = ConversationStore()
        store.append_message(db, created[0].id, created[1].id, text="Oi! Vi que nossos filhos têm idades parecidas.")
        store.append_message(db, created[1].id, created[0].id, text="Oi Maria! Que bom, vamos conversar.")

    return created


if __name__ == "__main__":
    init_db()
    db: Session = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
