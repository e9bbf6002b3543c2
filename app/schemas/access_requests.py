from __future__ import annotations

import uuid
from typing import Optional
from pydantic import BaseModel

from app.models.enums import RequestStatus


class AccessRequestCreate(BaseModel):
    recipient_id: uuid.UUID


class AccessRequestOut(BaseModel):
    id: str
    requester_id: str
    requester_name: str
    recipient_id: str
    status: RequestStatus
    created_at_iso: str
    responded_at_iso: Optional[str] = None


class AccessStatusResponse(BaseModel):
    other_id: str
    has_pending_request: bool
    can_view: bool
