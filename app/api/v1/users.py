# app/api/v1/users.py
from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.v1.serializers import _iso, children_out, user_public
from app.core.auth_deps import get_current_principal
from app.core.http_errors import to_http_exception
from app.core.redaction import mask_document
from app.db.session import get_db
from app.policies.children_data_policy import children_visible
from app.policies.principal import Principal
from app.policies.verification_policy import require_verified
from app.schemas.users import ProfileUpdate, UserDetail, UserPublic, VerificationIn, VerificationOut
from app.services.access_request_service import AccessRequestService
from app.services.review_service import ReviewService
from app.services.user_directory import UserDirectory
from app.services.verification_service import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


def _verification_out(record):
    return {
        "rg_masked": mask_document(record.rg),
        "cpf_masked": mask_document(record.cpf),
        "submitted_at_iso": _iso(record.submitted_at),
        "children": children_out(record),
    }


@router.patch("/me", response_model=UserPublic)
def update_me(
    req: ProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        user = UserDirectory().update_user(db, principal.user_id, **req.model_dump(exclude_unset=True))
    except ValueError as e:
        raise to_http_exception(e)
    return user_public(user)


@router.get("/me/verification", response_model=VerificationOut)
def get_my_verification(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    record = VerificationService().get(db, principal.user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Verification not submitted.")
    return _verification_out(record)


@router.put("/me/verification", response_model=VerificationOut)
def submit_my_verification(
    req: VerificationIn,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    payload = req.model_dump()
    children = payload.pop("children")
    try:
        record = VerificationService().submit(
            db,
            user_id=principal.user_id,
            children=children,
            trace_id=getattr(request.state, "request_id", None),
            **payload,
        )
    except ValueError as e:
        raise to_http_exception(e)
    return _verification_out(record)


@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    directory = UserDirectory()
    if user_id != principal.user_id:
        try:
            require_verified(directory.require_user(db, principal.user_id))
        except (ValueError, PermissionError) as e:
            raise to_http_exception(e)

    user = directory.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    granted = AccessRequestService().can_view(db, principal.user_id, user.id)
    visible = children_visible(principal.user_id, user.id, granted)

    body = user_public(user)
    body["average_rating"] = ReviewService().average_rating(db, user.id)
    body["can_view_children"] = visible
    body["children"] = children_out(user.verification) if visible and user.verification else None

    logger.debug("[users] viewer=%s owner=%s children_visible=%s", principal.user_id, user.id, visible)
    return body
