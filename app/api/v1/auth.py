#app/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.v1.serializers import user_public
from app.core.auth_deps import get_current_principal
from app.core.errors import DomainError
from app.core.http_errors import to_http_exception
from app.db.session import get_db
from app.policies.principal import Principal
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.users import UserPublic
from app.services.auth_service import AuthService
from app.services.user_directory import UserDirectory

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=UserPublic, status_code=201)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = UserDirectory().create_user(db, **req.model_dump())
    except DomainError as e:
        raise to_http_exception(e)
    return user_public(user)


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    result = AuthService().login(db, email=req.email, password=req.password)
    if not result:
        raise HTTPException(status_code=401, detail="Invalid credentials.")

    token, _session = result
    return TokenResponse(access_token=token)


@router.post("/logout")
def logout(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    AuthService().logout(db, principal.session_id)
    return {"status": "logged out"}


@router.get("/me", response_model=UserPublic)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    user = UserDirectory().get_user(db, principal.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user_public(user)
