import uuid

import pytest

from app.core.errors import ConflictError, NotFoundError
from app.core.security import verify_password
from app.services.user_directory import UserDirectory


def test_create_and_lookup_by_email_case_insensitive(db, make_user):
    maria = make_user("Maria", email="Maria@Example.com")
    directory = UserDirectory()

    assert maria.email == "maria@example.com"
    assert directory.get_user_by_email(db, "MARIA@example.COM").id == maria.id
    assert directory.get_user(db, maria.id).name == "Maria"
    assert verify_password("senha123", maria.password_hash)
    assert maria.verified is False


def test_duplicate_email_rejected(db, make_user):
    make_user("Maria", email="maria@example.com")
    with pytest.raises(ConflictError):
        make_user("Outra Maria", email="maria@example.com")


def test_list_users_in_registration_order(db, make_user):
    created = [make_user(name) for name in ("Maria", "Ana", "Fernanda")]
    assert [u.id for u in UserDirectory().list_users(db)] == [u.id for u in created]


def test_update_user_profile_fields(db, make_user):
    maria = make_user("Maria")
    user = UserDirectory().update_user(
        db,
        maria.id,
        available_to_babysit=True,
        availability_hours="18:00-22:00",
        location="Campinas, SP",
    )
    assert user.available_to_babysit is True
    assert user.availability_hours == "18:00-22:00"
    assert user.location == "Campinas, SP"


def test_update_rejects_protected_fields(db, make_user):
    maria = make_user("Maria")
    with pytest.raises(ValueError):
        UserDirectory().update_user(db, maria.id, verified=True)


def test_update_unknown_user(db):
    with pytest.raises(NotFoundError):
        UserDirectory().update_user(db, uuid.uuid4(), name="X")


def test_update_rejects_null_for_required_fields(db, make_user):
    maria = make_user("Maria")
    with pytest.raises(ValueError, match="cannot be null"):
        UserDirectory().update_user(db, maria.id, name=None)

    user = UserDirectory().update_user(db, maria.id, availability_hours=None)
    assert user.name == "Maria"
    assert user.availability_hours is None
