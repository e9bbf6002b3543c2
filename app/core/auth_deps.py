#app/core/auth_deps.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.security import InvalidTokenError, decode_session_token
from app.db.session import get_db
from app.policies.principal import Principal
from app.services.auth_service import AuthService

bearer = HTTPBearer(auto_error=True)


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - JWT is valid and carries sub + sid
    - the session is still active (not logged out) and belongs to sub

    Handlers receive the Principal explicitly; nothing is stored globally.
    """
    try:
        claims = decode_session_token(creds.credentials)
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e))

    session = AuthService().get_active_session(db, claims["session_id"])
    if not session or session.user_id != claims["user_id"]:
        raise HTTPException(status_code=401, detail="Session expired or logged out.")

    principal = Principal(
        user_id=claims["user_id"],
        session_id=claims["session_id"],
        display_name=claims["display_name"],
    )

    # for downstream middleware / handlers
    request.state.principal = principal

    return principal
