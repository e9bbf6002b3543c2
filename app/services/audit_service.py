from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog


class AuditAction:
    # Access requests
    ACCESS_REQUEST_CREATED = "ACCESS_REQUEST_CREATED"
    ACCESS_REQUEST_ACCEPTED = "ACCESS_REQUEST_ACCEPTED"
    ACCESS_REQUEST_DECLINED = "ACCESS_REQUEST_DECLINED"

    # Verification
    VERIFICATION_SUBMITTED = "VERIFICATION_SUBMITTED"


class AuditService:
    def write(
        self,
        db: Session,
        *,
        actor_user_id: Optional[str],
        action: str,
        ref_id: Optional[str],
        trace_id: Optional[str],
        details: Dict[str, Any],
    ) -> AuditLog:
        """
        Stage an append-only audit row. The caller commits it together with
        the change it describes.
        """
        row = AuditLog(
            actor_user_id=actor_user_id,
            action=action,
            ref_id=ref_id,
            request_id=trace_id,
            details_json=details,
        )
        db.add(row)
        return row
