# app/models/child_data_request.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, DateTime, Uuid, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.enums import RequestStatus


def _now():
    return datetime.now(timezone.utc)


class ChildDataRequest(Base):
    """
    One user's ask to view another user's children data.
    pending -> accepted | declined, exactly once.
    """
    __tablename__ = "child_data_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    requester_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # snapshot at creation time
    requester_name: Mapped[str] = mapped_column(String(256), nullable=False)

    recipient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RequestStatus.pending.value
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.pending.value

    __table_args__ = (
        # at most one live request per ordered pair
        Index(
            "uq_child_data_requests_pending_pair",
            "requester_id",
            "recipient_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("ix_child_data_requests_recipient_status", "recipient_id", "status"),
    )
