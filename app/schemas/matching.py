from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field

from app.schemas.users import UserPublic


class MatchEntry(BaseModel):
    user: UserPublic
    match_percentage: int = Field(..., ge=0, le=100)


class MatchListResponse(BaseModel):
    user_id: str
    matches: List[MatchEntry]


class ScoreResponse(BaseModel):
    user_id: str
    other_id: str
    match_percentage: int = Field(..., ge=0, le=100)
