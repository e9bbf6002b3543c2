# app/models/verification.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

from sqlalchemy import String, DateTime, Integer, Boolean, Text, Uuid, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.user import User


def _now():
    return datetime.now(timezone.utc)


class VerificationRecord(Base):
    """
    Mother + children questionnaire. One per user; replaced in full on re-verification.
    """
    __tablename__ = "verification_records"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    # mother identity
    rg: Mapped[str] = mapped_column(String(32), nullable=False)
    cpf: Mapped[str] = mapped_column(String(32), nullable=False)
    professional_history: Mapped[str] = mapped_column(Text, nullable=False, default="")
    references: Mapped[str] = mapped_column(Text, nullable=False, default="")
    criminal_record: Mapped[str] = mapped_column(Text, nullable=False, default="")

    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)

    user: Mapped["User"] = relationship(back_populates="verification")

    children: Mapped[List["ChildProfile"]] = relationship(
        back_populates="verification",
        cascade="all, delete-orphan",
        order_by="ChildProfile.position",
    )


class ChildProfile(Base):
    __tablename__ = "child_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    verification_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("verification_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    documents: Mapped[str] = mapped_column(Text, nullable=False, default="")
    allergies: Mapped[str] = mapped_column(Text, nullable=False, default="")
    medications: Mapped[str] = mapped_column(Text, nullable=False, default="")

    screen_restricted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    screen_time_limit: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    # labels from ACTIVITY_CATALOG
    activities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    special_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    verification: Mapped[VerificationRecord] = relationship(back_populates="children")
