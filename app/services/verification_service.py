# app/services/verification_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import ACTIVITY_CATALOG
from app.models.verification import ChildProfile, VerificationRecord
from app.services.audit_service import AuditAction, AuditService
from app.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)


def normalize_activities(labels: Iterable[str]) -> List[str]:
    """
    Deduplicate while keeping first-seen order. Every label must come from
    ACTIVITY_CATALOG.
    """
    seen: List[str] = []
    for label in labels:
        if label not in ACTIVITY_CATALOG:
            raise ValueError(f"Unknown activity: {label}")
        if label not in seen:
            seen.append(label)
    return seen


class VerificationService:
    def get(self, db: Session, user_id: uuid.UUID) -> Optional[VerificationRecord]:
        return db.execute(
            select(VerificationRecord).where(VerificationRecord.user_id == user_id)
        ).scalar_one_or_none()

    def _build_children(self, children: Sequence[Mapping[str, Any]]) -> List[ChildProfile]:
        if not children:
            raise ValueError("At least one child is required.")

        built = []
        for position, child in enumerate(children):
            name = (child.get("name") or "").strip()
            age = child.get("age")
            if not name or age is None or int(age) <= 0:
                raise ValueError("Name and age are required for every child.")

            built.append(
                ChildProfile(
                    position=position,
                    name=name,
                    age=int(age),
                    documents=child.get("documents") or "",
                    allergies=child.get("allergies") or "",
                    medications=child.get("medications") or "",
                    screen_restricted=bool(child.get("screen_restricted", False)),
                    screen_time_limit=child.get("screen_time_limit") or "",
                    activities=normalize_activities(child.get("activities") or []),
                    special_notes=child.get("special_notes") or "",
                )
            )
        return built

    def submit(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        rg: str,
        cpf: str,
        children: Sequence[Mapping[str, Any]],
        professional_history: str = "",
        references: str = "",
        criminal_record: str = "",
        trace_id: Optional[str] = None,
    ) -> VerificationRecord:
        """
        Full replace of the user's verification record.

        Rules:
        - RG and CPF are mandatory
        - at least one child, each with a name and age > 0
        - activities restricted to the catalog
        """
        if not (rg or "").strip() or not (cpf or "").strip():
            raise ValueError("RG and CPF are required.")

        user = UserDirectory().require_user(db, user_id)
        built_children = self._build_children(children)

        existing = self.get(db, user_id)
        if existing:
            db.delete(existing)
            db.flush()
            db.expire(user, ["verification"])

        record = VerificationRecord(
            user_id=user.id,
            rg=rg.strip(),
            cpf=cpf.strip(),
            professional_history=professional_history or "",
            references=references or "",
            criminal_record=criminal_record or "",
            children=built_children,
        )
        user.verification = record
        user.verified = True

        AuditService().write(
            db,
            actor_user_id=str(user.id),
            action=AuditAction.VERIFICATION_SUBMITTED,
            ref_id=str(user.id),
            trace_id=trace_id,
            details={"children": len(built_children), "replaced": existing is not None},
        )

        db.commit()
        db.refresh(record)

        logger.info("[verification] user=%s children=%d", user.id, len(built_children))
        return record
