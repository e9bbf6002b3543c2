#app/api/v1/matching.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.serializers import user_public
from app.core.auth_deps import get_current_principal
from app.core.http_errors import to_http_exception
from app.db.session import get_db
from app.policies.principal import Principal
from app.schemas.matching import MatchListResponse, ScoreResponse
from app.services.matching_service import MatchingService

router = APIRouter(prefix="/matching")


@router.get("", response_model=MatchListResponse)
def list_matches(
    limit: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Other users ranked by children compatibility, best first.
    Without `limit` the whole ranking is returned.
    """
    try:
        ranked = MatchingService().ranked_matches(db, user_id=principal.user_id, limit=limit)
    except ValueError as e:
        raise to_http_exception(e)

    return {
        "user_id": str(principal.user_id),
        "matches": [
            {"user": user_public(c.user), "match_percentage": c.score}
            for c in ranked
        ],
    }


@router.get("/score/{other_id}", response_model=ScoreResponse)
def get_score(
    other_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    try:
        score = MatchingService().score(db, user_id=principal.user_id, other_id=other_id)
    except ValueError as e:
        raise to_http_exception(e)

    return {
        "user_id": str(principal.user_id),
        "other_id": str(other_id),
        "match_percentage": score,
    }
