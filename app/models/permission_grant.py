# app/models/permission_grant.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Uuid, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _now():
    return datetime.now(timezone.utc)


class PermissionGrant(Base):
    """
    viewer_id may see owner_id's children data.
    Append-only: rows are written on request acceptance and never removed.
    """
    __tablename__ = "child_data_permissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    viewer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    request_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("child_data_requests.id", ondelete="SET NULL"), nullable=True
    )

    granted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)

    __table_args__ = (
        UniqueConstraint("owner_id", "viewer_id", name="uq_child_data_permission_pair"),
    )
