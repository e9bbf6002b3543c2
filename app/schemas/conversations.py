from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.enums import MessageKind, RequestStatus


class MessageCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=4000)


class MessageOut(BaseModel):
    id: int
    sender_id: str
    text: str
    kind: MessageKind
    created_at_iso: str
    request_id: Optional[str] = None
    # resolved from the request row at read time
    request_status: Optional[RequestStatus] = None


class ConversationOut(BaseModel):
    id: str
    other_user_id: str
    messages: List[MessageOut] = Field(default_factory=list)


class ConversationSummary(BaseModel):
    id: str
    other_user_id: str
    other_user_name: Optional[str] = None
    last_message: Optional[MessageOut] = None
