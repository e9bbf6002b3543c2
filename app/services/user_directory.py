# app/services/user_directory.py
from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from app.core.errors import ConflictError, NotFoundError
from app.core.security import hash_password
from app.models.user import User
from app.models.verification import VerificationRecord

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserDirectory:
    PROFILE_FIELDS = {
        "name",
        "mother_age",
        "child_age_range",
        "work_hours",
        "location",
        "available_to_babysit",
        "availability_hours",
        "availability_notes",
    }
    NULLABLE_FIELDS = {"availability_hours", "availability_notes"}

    # ---------------------------
    # READS
    # ---------------------------

    def get_user(self, db: Session, user_id: uuid.UUID) -> Optional[User]:
        return db.get(User, user_id)

    def require_user(self, db: Session, user_id: uuid.UUID) -> User:
        user = self.get_user(db, user_id)
        if not user:
            raise NotFoundError("User not found.")
        return user

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        ).scalar_one_or_none()

    def list_users(self, db: Session) -> List[User]:
        """
        All users in registration order, with verification data loaded.
        """
        return list(
            db.execute(
                select(User)
                .options(
                    selectinload(User.verification).selectinload(VerificationRecord.children)
                )
                .order_by(User.created_at, User.id)
            )
            .scalars()
            .all()
        )

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def create_user(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        password: str,
        mother_age: int,
        child_age_range: str,
        work_hours: str,
        location: str,
        available_to_babysit: bool = False,
        availability_hours: Optional[str] = None,
        availability_notes: Optional[str] = None,
    ) -> User:
        if self.get_user_by_email(db, email):
            raise ConflictError("Email already registered.")

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=hash_password(password),
            mother_age=mother_age,
            child_age_range=child_age_range,
            work_hours=work_hours,
            location=location,
            available_to_babysit=available_to_babysit,
            availability_hours=availability_hours,
            availability_notes=availability_notes,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info("[directory] user registered id=%s", user.id)
        return user

    def update_user(self, db: Session, user_id: uuid.UUID, **changes: Any) -> User:
        unknown = set(changes) - self.PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {sorted(unknown)}")

        nulled = sorted(f for f, v in changes.items() if v is None and f not in self.NULLABLE_FIELDS)
        if nulled:
            raise ValueError(f"Fields cannot be null: {nulled}")

        user = self.require_user(db, user_id)
        for field, value in changes.items():
            setattr(user, field, value)

        db.commit()
        db.refresh(user)
        return user
