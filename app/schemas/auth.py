from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", max_length=320)
    password: str = Field(..., min_length=4, max_length=128)
    mother_age: int = Field(..., gt=0, lt=120)
    child_age_range: str = Field(..., min_length=1, description="e.g. 3-5 anos")
    work_hours: str = Field(..., min_length=1, description="e.g. 08:00-17:00")
    location: str = Field(..., min_length=1)
    available_to_babysit: bool = False
    availability_hours: Optional[str] = None
    availability_notes: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
