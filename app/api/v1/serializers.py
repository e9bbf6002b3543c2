# app/api/v1/serializers.py
from __future__ import annotations

from typing import Any, Dict, List

from app.models.child_data_request import ChildDataRequest
from app.models.conversation import Message
from app.models.review import Review
from app.models.user import User
from app.models.verification import VerificationRecord


def _iso(dt):
    return dt.isoformat() if dt else None


def user_public(u: User) -> Dict[str, Any]:
    return {
        "id": str(u.id),
        "name": u.name,
        "mother_age": u.mother_age,
        "child_age_range": u.child_age_range,
        "work_hours": u.work_hours,
        "location": u.location,
        "available_to_babysit": bool(u.available_to_babysit),
        "availability_hours": u.availability_hours,
        "availability_notes": u.availability_notes,
        "verified": bool(u.verified),
    }


def children_out(record: VerificationRecord) -> List[Dict[str, Any]]:
    return [
        {
            "name": c.name,
            "age": c.age,
            "documents": c.documents,
            "allergies": c.allergies,
            "medications": c.medications,
            "screen_restricted": c.screen_restricted,
            "screen_time_limit": c.screen_time_limit,
            "activities": list(c.activities or []),
            "special_notes": c.special_notes,
        }
        for c in record.children
    ]


def request_out(r: ChildDataRequest) -> Dict[str, Any]:
    return {
        "id": str(r.id),
        "requester_id": str(r.requester_id),
        "requester_name": r.requester_name,
        "recipient_id": str(r.recipient_id),
        "status": r.status,
        "created_at_iso": _iso(r.created_at),
        "responded_at_iso": _iso(r.responded_at),
    }


def message_out(m: Message) -> Dict[str, Any]:
    return {
        "id": m.id,
        "sender_id": str(m.sender_id),
        "text": m.text,
        "kind": m.kind,
        "created_at_iso": _iso(m.created_at),
        "request_id": str(m.request_id) if m.request_id else None,
        "request_status": m.request_status,
    }


def review_out(r: Review) -> Dict[str, Any]:
    return {
        "id": str(r.id),
        "reviewer_id": str(r.reviewer_id),
        "reviewer_name": r.reviewer_name,
        "stars": r.stars,
        "comment": r.comment,
        "created_at_iso": _iso(r.created_at),
    }
