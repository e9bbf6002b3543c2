# app/services/matching_service.py
"""
Children-compatibility matching.

Pairwise score between two users:
  for every (child_a, child_b) in children_a x children_b
    +1 if |age_a - age_b| <= 1
    +1 if both screen-restriction flags are equal
    +|activities_a ∩ activities_b| / |activities_a ∪ activities_b|  (0 if union empty)
  score = round_half_up(100 * total / (3 * pairs))

Users without verification data (or without children) score 0.
Scores are recomputed on every call; nothing is cached.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.models.user import User
from app.services.user_directory import UserDirectory

SUB_SCORES_PER_PAIR = 3
AGE_TOLERANCE_YEARS = 1


@dataclass(frozen=True)
class MatchCandidate:
    user: Any
    score: int


def _children_of(user: Any) -> Sequence[Any]:
    record = getattr(user, "verification", None)
    if record is None:
        return ()
    return record.children or ()


def _activity_overlap(a: Iterable[str], b: Iterable[str]) -> Fraction:
    set_a, set_b = set(a or ()), set(b or ())
    union = set_a | set_b
    if not union:
        return Fraction(0)
    return Fraction(len(set_a & set_b), len(union))


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def children_similarity(children_a: Sequence[Any], children_b: Sequence[Any]) -> int:
    matches = Fraction(0)
    comparisons = 0

    for child_a in children_a:
        for child_b in children_b:
            if abs(child_a.age - child_b.age) <= AGE_TOLERANCE_YEARS:
                matches += 1
            if bool(child_a.screen_restricted) == bool(child_b.screen_restricted):
                matches += 1
            matches += _activity_overlap(child_a.activities, child_b.activities)
            comparisons += SUB_SCORES_PER_PAIR

    if comparisons == 0:
        return 0
    return _round_half_up(matches * 100 / comparisons)


def similarity(user_a: Any, user_b: Any) -> int:
    return children_similarity(_children_of(user_a), _children_of(user_b))


def rank_matches(
    user_id: uuid.UUID,
    all_users: Iterable[Any],
    limit: Optional[int] = None,
) -> List[MatchCandidate]:
    """
    Score every other user against `user_id`, highest first.
    Ties keep the enumeration order of `all_users`.
    """
    if limit is not None and limit < 0:
        raise ValueError("limit must be >= 0.")

    users = list(all_users)
    current = next((u for u in users if u.id == user_id), None)
    if current is None:
        return []

    candidates = [
        MatchCandidate(user=u, score=similarity(current, u))
        for u in users
        if u.id != user_id
    ]
    # list.sort is stable, also with reverse=True
    candidates.sort(key=lambda c: c.score, reverse=True)

    if limit is not None:
        candidates = candidates[:limit]
    return candidates


class MatchingService:
    def score(self, db: Session, *, user_id: uuid.UUID, other_id: uuid.UUID) -> int:
        directory = UserDirectory()
        me: User = directory.require_user(db, user_id)
        other: User = directory.require_user(db, other_id)
        return similarity(me, other)

    def ranked_matches(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        limit: Optional[int] = None,
    ) -> List[MatchCandidate]:
        directory = UserDirectory()
        directory.require_user(db, user_id)
        return rank_matches(user_id, directory.list_users(db), limit=limit)
