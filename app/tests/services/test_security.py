import uuid

import pytest
from jose import jwt

from app.core.config import get_settings
from app.core.security import (
    InvalidTokenError,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("senha123")
    assert hashed != "senha123"
    assert verify_password("senha123", hashed)
    assert not verify_password("outra", hashed)


def test_session_token_claims():
    uid, sid = uuid.uuid4(), uuid.uuid4()
    token = create_session_token(user_id=uid, session_id=sid, display_name="Maria")

    claims = decode_session_token(token)

    assert claims == {"user_id": uid, "session_id": sid, "display_name": "Maria"}


def test_expired_token_rejected():
    token = create_session_token(
        user_id=uuid.uuid4(), session_id=uuid.uuid4(), display_name="Maria", expires_minutes=-1
    )
    with pytest.raises(InvalidTokenError):
        decode_session_token(token)


def test_token_without_session_rejected():
    settings = get_settings()
    token = jwt.encode({"sub": str(uuid.uuid4())}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_session_token(token)
