# app/services/conversation_store.py
from __future__ import annotations

import uuid
from typing import Callable, List, Optional, Tuple

from sqlalchemy import select, or_, desc
from sqlalchemy.orm import Session

from app.models.child_data_request import ChildDataRequest
from app.models.conversation import Conversation, Message
from app.models.enums import MessageKind


def canonical_pair(user_a: uuid.UUID, user_b: uuid.UUID) -> Tuple[uuid.UUID, uuid.UUID]:
    return (user_a, user_b) if str(user_a) <= str(user_b) else (user_b, user_a)


class ConversationStore:
    # ---------------------------
    # READS
    # ---------------------------

    def get_conversation(
        self, db: Session, user_a: uuid.UUID, user_b: uuid.UUID
    ) -> Optional[Conversation]:
        a, b = canonical_pair(user_a, user_b)
        return db.execute(
            select(Conversation).where(
                Conversation.user_a_id == a,
                Conversation.user_b_id == b,
            )
        ).scalar_one_or_none()

    def list_user_conversations(self, db: Session, user_id: uuid.UUID) -> List[Conversation]:
        return list(
            db.execute(
                select(Conversation)
                .where(
                    or_(
                        Conversation.user_a_id == user_id,
                        Conversation.user_b_id == user_id,
                    )
                )
                .order_by(desc(Conversation.created_at))
            )
            .scalars()
            .all()
        )

    def find_message(
        self, conversation: Conversation, predicate: Callable[[Message], bool]
    ) -> Optional[Message]:
        return next((m for m in conversation.messages if predicate(m)), None)

    def find_request_message(
        self, db: Session, request: ChildDataRequest
    ) -> Optional[Message]:
        conversation = self.get_conversation(db, request.requester_id, request.recipient_id)
        if not conversation:
            return None
        return self.find_message(conversation, lambda m: m.request_id == request.id)

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def append_message(
        self,
        db: Session,
        sender_id: uuid.UUID,
        recipient_id: uuid.UUID,
        *,
        text: str,
        kind: MessageKind = MessageKind.text,
        request_id: Optional[uuid.UUID] = None,
        commit: bool = True,
    ) -> Conversation:
        """
        Append a message from sender to recipient, creating the conversation
        if the pair has none. With commit=False the caller owns the transaction.
        """
        if sender_id == recipient_id:
            raise ValueError("Cannot send a message to yourself.")

        conversation = self.get_conversation(db, sender_id, recipient_id)
        if not conversation:
            a, b = canonical_pair(sender_id, recipient_id)
            conversation = Conversation(user_a_id=a, user_b_id=b)
            db.add(conversation)

        conversation.messages.append(
            Message(
                sender_id=sender_id,
                kind=kind.value,
                text=text,
                request_id=request_id,
            )
        )
        db.flush()

        if commit:
            db.commit()
            db.refresh(conversation)
        return conversation
