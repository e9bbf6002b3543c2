# app/core/security.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(ValueError):
    pass


def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)


def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)


def create_session_token(
    *,
    user_id: uuid.UUID,
    session_id: uuid.UUID,
    display_name: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Bearer token for one login session. `sid` ties the token to a
    UserSession row so logout can revoke it before expiry.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "sid": str(session_id),
        "display_name": display_name,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes or settings.jwt_access_token_minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError("Invalid or expired token.") from exc


def decode_session_token(token: str) -> Dict[str, Any]:
    """
    Decoded claims with `sub` and `sid` parsed to UUIDs.
    Raises InvalidTokenError for anything unusable.
    """
    payload = decode_token(token)
    try:
        user_id = uuid.UUID(str(payload["sub"]))
        session_id = uuid.UUID(str(payload["sid"]))
    except (KeyError, ValueError) as exc:
        raise InvalidTokenError("Token missing required claims.") from exc

    return {
        "user_id": user_id,
        "session_id": session_id,
        "display_name": str(payload.get("display_name") or "Unknown"),
    }
