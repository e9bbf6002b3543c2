#app/schemas/users.py
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChildProfileIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0, lt=30)
    documents: str = ""
    allergies: str = ""
    medications: str = ""
    screen_restricted: bool = False
    screen_time_limit: str = ""
    activities: List[str] = Field(default_factory=list)
    special_notes: str = ""


class ChildProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    age: int
    documents: str
    allergies: str
    medications: str
    screen_restricted: bool
    screen_time_limit: str
    activities: List[str]
    special_notes: str


class VerificationIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rg: str = Field(..., min_length=1)
    cpf: str = Field(..., min_length=1)
    professional_history: str = ""
    references: str = ""
    criminal_record: str = ""
    children: List[ChildProfileIn] = Field(..., min_length=1)


class VerificationOut(BaseModel):
    rg_masked: Optional[str] = None
    cpf_masked: Optional[str] = None
    submitted_at_iso: str
    children: List[ChildProfileOut]


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    mother_age: Optional[int] = Field(default=None, gt=0, lt=120)
    child_age_range: Optional[str] = None
    work_hours: Optional[str] = None
    location: Optional[str] = None
    available_to_babysit: Optional[bool] = None
    availability_hours: Optional[str] = None
    availability_notes: Optional[str] = None

    @model_validator(mode="after")
    def _no_null_for_required_fields(self):
        # omitted means "keep"; explicit null is only allowed for the optional availability fields
        nulled = sorted(
            f for f in self.model_fields_set
            if getattr(self, f) is None and f not in ("availability_hours", "availability_notes")
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {nulled}")
        return self


class UserPublic(BaseModel):
    id: str
    name: str
    mother_age: int
    child_age_range: str
    work_hours: str
    location: str
    available_to_babysit: bool
    availability_hours: Optional[str] = None
    availability_notes: Optional[str] = None
    verified: bool


class UserDetail(UserPublic):
    average_rating: float = 0.0
    can_view_children: bool = False
    # only populated for the owner or a permitted viewer
    children: Optional[List[ChildProfileOut]] = None
