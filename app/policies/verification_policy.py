from __future__ import annotations

from app.models.user import User


def require_verified(user: User) -> None:
    """
    Viewing other profiles and chatting are open only to users who
    completed the verification questionnaire.
    """
    if not user.verified:
        raise PermissionError("Complete verification to interact with other users.")
