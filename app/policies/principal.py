#app/policies/principal.py
from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """
    Explicit session context handed to every handler that needs identity.
    """
    user_id: uuid.UUID
    session_id: uuid.UUID
    display_name: str
