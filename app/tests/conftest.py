import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import app.models  # noqa

from app.db.base import Base
from app.db.session import get_db
from app.main import create_app
from app.services.user_directory import UserDirectory
from app.services.verification_service import VerificationService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def other_db(db):
    """A second, independent session on the same database."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db):
    application = create_app()

    def _get_db():
        yield db

    application.dependency_overrides[get_db] = _get_db
    with TestClient(application) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name=None, children=None, **overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "name": name or f"Mãe {n}",
            "email": f"mae{n}@example.com",
            "password": "senha123",
            "mother_age": 30,
            "child_age_range": "3-5",
            "work_hours": "08:00-17:00",
            "location": "São Paulo, SP",
        }
        fields.update(overrides)
        user = UserDirectory().create_user(db, **fields)
        if children:
            VerificationService().submit(
                db,
                user_id=user.id,
                rg=f"RG{n:06d}",
                cpf=f"CPF{n:08d}",
                children=children,
            )
            db.refresh(user)
        return user

    return _make
