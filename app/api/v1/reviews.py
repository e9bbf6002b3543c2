# app/api/v1/reviews.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.v1.serializers import review_out
from app.core.auth_deps import get_current_principal
from app.core.http_errors import to_http_exception
from app.db.session import get_db
from app.policies.principal import Principal
from app.schemas.reviews import ReviewCreate, ReviewListResponse, ReviewOut
from app.services.review_service import ReviewService
from app.services.user_directory import UserDirectory

router = APIRouter(prefix="/users")


@router.get("/{user_id}/reviews", response_model=ReviewListResponse)
def list_reviews(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    if not UserDirectory().get_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    svc = ReviewService()
    return {
        "user_id": str(user_id),
        "average_rating": svc.average_rating(db, user_id),
        "reviews": [review_out(r) for r in svc.list_reviews(db, user_id)],
    }


@router.post("/{user_id}/reviews", response_model=ReviewOut, status_code=201)
def add_review(
    user_id: uuid.UUID,
    req: ReviewCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        review = ReviewService().add_review(
            db,
            user_id=user_id,
            reviewer_id=principal.user_id,
            stars=req.stars,
            comment=req.comment,
        )
    except ValueError as e:
        raise to_http_exception(e)
    return review_out(review)
