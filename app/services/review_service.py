# app/services/review_service.py
from __future__ import annotations

import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, DomainError
from app.models.review import Review
from app.services.user_directory import UserDirectory


class ReviewService:
    def has_reviewed(self, db: Session, *, user_id: uuid.UUID, reviewer_id: uuid.UUID) -> bool:
        row = db.execute(
            select(Review.id).where(
                Review.user_id == user_id,
                Review.reviewer_id == reviewer_id,
            )
        ).first()
        return row is not None

    def list_reviews(self, db: Session, user_id: uuid.UUID) -> List[Review]:
        return list(
            db.execute(
                select(Review).where(Review.user_id == user_id).order_by(Review.created_at)
            )
            .scalars()
            .all()
        )

    def average_rating(self, db: Session, user_id: uuid.UUID) -> float:
        """
        Mean stars rounded half-up to one decimal; 0.0 without reviews.
        """
        count, total = db.execute(
            select(func.count(Review.id), func.sum(Review.stars)).where(Review.user_id == user_id)
        ).one()
        if not count:
            return 0.0
        avg = (Decimal(int(total)) / Decimal(int(count))).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
        return float(avg)

    def add_review(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        reviewer_id: uuid.UUID,
        stars: int,
        comment: str = "",
    ) -> Review:
        if user_id == reviewer_id:
            raise DomainError("You cannot review yourself.")
        if not 1 <= stars <= 5:
            raise ValueError("Stars must be between 1 and 5.")

        directory = UserDirectory()
        directory.require_user(db, user_id)
        reviewer = directory.require_user(db, reviewer_id)

        if self.has_reviewed(db, user_id=user_id, reviewer_id=reviewer_id):
            raise ConflictError("You have already reviewed this user.")

        review = Review(
            user_id=user_id,
            reviewer_id=reviewer.id,
            reviewer_name=reviewer.name,
            stars=stars,
            comment=comment or "",
        )
        db.add(review)
        db.commit()
        db.refresh(review)
        return review
