# app/api/v1/conversations.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.v1.serializers import message_out
from app.core.auth_deps import get_current_principal
from app.core.http_errors import to_http_exception
from app.db.session import get_db
from app.policies.principal import Principal
from app.policies.verification_policy import require_verified
from app.schemas.conversations import ConversationOut, ConversationSummary, MessageCreate, MessageOut
from app.services.conversation_store import ConversationStore
from app.services.user_directory import UserDirectory

router = APIRouter(prefix="/conversations")


@router.get("", response_model=list[ConversationSummary])
def list_conversations(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    directory = UserDirectory()
    out = []
    for conv in ConversationStore().list_user_conversations(db, principal.user_id):
        other_id = conv.other_user_id(principal.user_id)
        other = directory.get_user(db, other_id)
        out.append(
            {
                "id": str(conv.id),
                "other_user_id": str(other_id),
                "other_user_name": other.name if other else None,
                "last_message": message_out(conv.messages[-1]) if conv.messages else None,
            }
        )
    return out


@router.get("/{other_id}", response_model=ConversationOut)
def get_conversation(
    other_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    conv = ConversationStore().get_conversation(db, principal.user_id, other_id)
    if not conv:
        raise HTTPException(status_code=404, detail="Conversation not found.")
    return {
        "id": str(conv.id),
        "other_user_id": str(other_id),
        "messages": [message_out(m) for m in conv.messages],
    }


@router.post("/{other_id}/messages", response_model=MessageOut, status_code=201)
def send_message(
    other_id: uuid.UUID,
    req: MessageCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    text = req.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Empty message")

    directory = UserDirectory()
    try:
        require_verified(directory.require_user(db, principal.user_id))
        directory.require_user(db, other_id)
        conv = ConversationStore().append_message(db, principal.user_id, other_id, text=text)
    except (ValueError, PermissionError) as e:
        raise to_http_exception(e)
    return message_out(conv.messages[-1])
