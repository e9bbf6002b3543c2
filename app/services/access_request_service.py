# app/services/access_request_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    DomainError,
    DuplicateRequestError,
    InvalidStateTransitionError,
    NotFoundError,
)
from app.models.child_data_request import ChildDataRequest
from app.models.enums import MessageKind, RequestStatus
from app.models.permission_grant import PermissionGrant
from app.services.audit_service import AuditAction, AuditService
from app.services.conversation_store import ConversationStore
from app.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = {RequestStatus.accepted, RequestStatus.declined}


def _now():
    return datetime.now(timezone.utc)


def request_message_text(requester_name: str) -> str:
    return (
        f"{requester_name} would like access to your children's data "
        "to take better care of them."
    )


class AccessRequestService:
    """
    Lifecycle of a "may I see your children's data" request, per ordered
    (requester, recipient) pair:

        none -> pending -> accepted | declined

    Terminal states are final. A second response raises
    InvalidStateTransitionError and leaves the request untouched.
    """

    # ---------------------------
    # READS
    # ---------------------------

    def get_request(self, db: Session, request_id: uuid.UUID) -> Optional[ChildDataRequest]:
        return db.get(ChildDataRequest, request_id)

    def require_request(self, db: Session, request_id: uuid.UUID) -> ChildDataRequest:
        req = self.get_request(db, request_id)
        if not req:
            raise NotFoundError("Request not found.")
        return req

    def _get_request_for_update(
        self, db: Session, request_id: uuid.UUID
    ) -> Optional[ChildDataRequest]:
        """
        Lock the request row (FOR UPDATE) to serialize concurrent responses.
        """
        return db.execute(
            select(ChildDataRequest)
            .where(ChildDataRequest.id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def has_pending_request(
        self, db: Session, requester_id: uuid.UUID, recipient_id: uuid.UUID
    ) -> bool:
        row = db.execute(
            select(ChildDataRequest.id).where(
                ChildDataRequest.requester_id == requester_id,
                ChildDataRequest.recipient_id == recipient_id,
                ChildDataRequest.status == RequestStatus.pending.value,
            )
        ).first()
        return row is not None

    def can_view(self, db: Session, viewer_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        row = db.execute(
            select(PermissionGrant.id).where(
                PermissionGrant.owner_id == owner_id,
                PermissionGrant.viewer_id == viewer_id,
            )
        ).first()
        return row is not None

    def list_pending_for_user(self, db: Session, user_id: uuid.UUID) -> List[ChildDataRequest]:
        return list(
            db.execute(
                select(ChildDataRequest)
                .where(
                    ChildDataRequest.recipient_id == user_id,
                    ChildDataRequest.status == RequestStatus.pending.value,
                )
                .order_by(ChildDataRequest.created_at)
            )
            .scalars()
            .all()
        )

    # ---------------------------
    # TRANSITIONS
    # ---------------------------

    def create_request(
        self,
        db: Session,
        *,
        requester_id: uuid.UUID,
        recipient_id: uuid.UUID,
        trace_id: Optional[str] = None,
    ) -> ChildDataRequest:
        """
        none -> pending. Inserts the request and the linked chat message in
        one transaction.
        """
        directory = UserDirectory()
        requester = directory.require_user(db, requester_id)
        recipient = directory.require_user(db, recipient_id)

        if requester.id == recipient.id:
            raise DomainError("Cannot request access to your own children data.")

        if self.has_pending_request(db, requester.id, recipient.id):
            raise DuplicateRequestError("A pending request already exists.")

        req = ChildDataRequest(
            requester_id=requester.id,
            requester_name=requester.name,
            recipient_id=recipient.id,
            status=RequestStatus.pending.value,
        )
        db.add(req)
        try:
            db.flush()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateRequestError("A pending request already exists.") from exc

        ConversationStore().append_message(
            db,
            requester.id,
            recipient.id,
            text=request_message_text(requester.name),
            kind=MessageKind.child_data_request,
            request_id=req.id,
            commit=False,
        )

        AuditService().write(
            db,
            actor_user_id=str(requester.id),
            action=AuditAction.ACCESS_REQUEST_CREATED,
            ref_id=str(req.id),
            trace_id=trace_id,
            details={"recipient_id": str(recipient.id)},
        )

        db.commit()
        db.refresh(req)

        logger.info(
            "[access-request] created id=%s requester=%s recipient=%s",
            req.id,
            req.requester_id,
            req.recipient_id,
        )
        return req

    def respond(
        self,
        db: Session,
        *,
        request_id: uuid.UUID,
        decision: RequestStatus,
        responder_id: Optional[uuid.UUID] = None,
        trace_id: Optional[str] = None,
    ) -> ChildDataRequest:
        """
        pending -> accepted | declined.

        Accepting also grants the requester view permission on the
        recipient's children data. Status, timestamp and grant are
        committed together.
        """
        if decision not in TERMINAL_STATUSES:
            raise ValueError("Decision must be accepted or declined.")

        req = self._get_request_for_update(db, request_id)
        if not req:
            raise NotFoundError("Request not found.")

        if responder_id is not None and req.recipient_id != responder_id:
            raise PermissionError("Only the recipient may respond to this request.")

        if not req.is_pending:
            raise InvalidStateTransitionError(f"Request already {req.status}.")

        req.status = decision.value
        req.responded_at = _now()

        if decision == RequestStatus.accepted:
            self._grant(
                db,
                owner_id=req.recipient_id,
                viewer_id=req.requester_id,
                request_id=req.id,
            )

        AuditService().write(
            db,
            actor_user_id=str(req.recipient_id),
            action=(
                AuditAction.ACCESS_REQUEST_ACCEPTED
                if decision == RequestStatus.accepted
                else AuditAction.ACCESS_REQUEST_DECLINED
            ),
            ref_id=str(req.id),
            trace_id=trace_id,
            details={"requester_id": str(req.requester_id)},
        )

        db.commit()
        db.refresh(req)

        logger.info("[access-request] id=%s -> %s", req.id, req.status)
        return req

    def accept(self, db: Session, *, request_id: uuid.UUID, **kwargs) -> ChildDataRequest:
        return self.respond(db, request_id=request_id, decision=RequestStatus.accepted, **kwargs)

    def decline(self, db: Session, *, request_id: uuid.UUID, **kwargs) -> ChildDataRequest:
        return self.respond(db, request_id=request_id, decision=RequestStatus.declined, **kwargs)

    def _grant(
        self,
        db: Session,
        *,
        owner_id: uuid.UUID,
        viewer_id: uuid.UUID,
        request_id: uuid.UUID,
    ) -> None:
        if self.can_view(db, viewer_id, owner_id):
            return
        db.add(PermissionGrant(owner_id=owner_id, viewer_id=viewer_id, request_id=request_id))
