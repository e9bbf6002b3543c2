# app/services/auth_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.security import create_session_token, verify_password
from app.models.user import User
from app.models.user_session import UserSession
from app.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc)


class AuthService:
    def authenticate(self, db: Session, email: str, password: str) -> Optional[User]:
        user = UserDirectory().get_user_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def login(self, db: Session, *, email: str, password: str) -> Optional[Tuple[str, UserSession]]:
        """
        Opens a session and returns (access_token, session), or None on bad credentials.
        """
        user = self.authenticate(db, email, password)
        if not user:
            logger.info("[auth] login rejected")
            return None

        session = UserSession(user_id=user.id)
        db.add(session)
        db.commit()
        db.refresh(session)

        token = create_session_token(
            user_id=user.id,
            session_id=session.id,
            display_name=user.name,
        )
        logger.info("[auth] login user=%s session=%s", user.id, session.id)
        return token, session

    def get_active_session(self, db: Session, session_id: uuid.UUID) -> Optional[UserSession]:
        session = db.get(UserSession, session_id)
        if not session or not session.is_active:
            return None
        return session

    def logout(self, db: Session, session_id: uuid.UUID) -> bool:
        session = self.get_active_session(db, session_id)
        if not session:
            return False

        session.revoked_at = _now()
        db.commit()
        logger.info("[auth] logout session=%s", session_id)
        return True
