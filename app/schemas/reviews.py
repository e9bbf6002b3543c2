from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    stars: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=2000)


class ReviewOut(BaseModel):
    id: str
    reviewer_id: str
    reviewer_name: str
    stars: int
    comment: str
    created_at_iso: str


class ReviewListResponse(BaseModel):
    user_id: str
    average_rating: float
    reviews: List[ReviewOut]
