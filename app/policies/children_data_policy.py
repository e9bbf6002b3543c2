from __future__ import annotations

import uuid


def children_visible(viewer_id: uuid.UUID, owner_id: uuid.UUID, granted: bool) -> bool:
    """
    Owners always see their own children data; anyone else needs a grant.
    """
    return viewer_id == owner_id or granted
