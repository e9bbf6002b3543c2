from __future__ import annotations


def mask_document(value: str | None) -> str | None:
    """Keep only the last 2 characters of an identity document number."""
    if not value:
        return None
    if len(value) <= 2:
        return "*" * len(value)
    return "*" * (len(value) - 2) + value[-2:]
