# app/api/v1/access_requests.py
from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import request_out
from app.core.auth_deps import get_current_principal
from app.core.http_errors import to_http_exception
from app.db.session import get_db
from app.models.enums import RequestStatus
from app.policies.principal import Principal
from app.schemas.access_requests import AccessRequestCreate, AccessRequestOut, AccessStatusResponse
from app.services.access_request_service import AccessRequestService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/access-requests")


@router.post("", response_model=AccessRequestOut, status_code=201)
def create_access_request(
    req: AccessRequestCreate,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        created = AccessRequestService().create_request(
            db,
            requester_id=principal.user_id,
            recipient_id=req.recipient_id,
            trace_id=getattr(request.state, "request_id", None),
        )
    except ValueError as e:
        logger.info("[access-requests] create rejected: %s", e)
        raise to_http_exception(e)
    return request_out(created)


@router.get("/pending", response_model=list[AccessRequestOut])
def list_pending(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = AccessRequestService().list_pending_for_user(db, principal.user_id)
    return [request_out(r) for r in rows]


@router.get("/status/{other_id}", response_model=AccessStatusResponse)
def access_status(
    other_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Whether the caller already asked `other_id` and whether access was granted.
    """
    svc = AccessRequestService()
    return {
        "other_id": str(other_id),
        "has_pending_request": svc.has_pending_request(db, principal.user_id, other_id),
        "can_view": svc.can_view(db, principal.user_id, other_id),
    }


@router.get("/{request_id}", response_model=AccessRequestOut)
def get_access_request(
    request_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    req = AccessRequestService().get_request(db, request_id)
    if not req:
        raise HTTPException(status_code=404, detail="Request not found.")
    if principal.user_id not in (req.requester_id, req.recipient_id):
        raise HTTPException(status_code=403, detail="Not a party to this request.")
    return request_out(req)


def _respond(request_id, decision, request, db, principal):
    try:
        req = AccessRequestService().respond(
            db,
            request_id=request_id,
            decision=decision,
            responder_id=principal.user_id,
            trace_id=getattr(request.state, "request_id", None),
        )
    except (ValueError, PermissionError) as e:
        logger.info("[access-requests] respond rejected id=%s: %s", request_id, e)
        raise to_http_exception(e)
    return request_out(req)


@router.post("/{request_id}/accept", response_model=AccessRequestOut)
def accept_access_request(
    request_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return _respond(request_id, RequestStatus.accepted, request, db, principal)


@router.post("/{request_id}/decline", response_model=AccessRequestOut)
def decline_access_request(
    request_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return _respond(request_id, RequestStatus.declined, request, db, principal)
