"""Identifier helpers for authored content."""

import uuid


def new_id(prefix: str = "") -> str:
    """
    Generate a fresh identifier such as ``"ch-1f3a9c2e7b"``.

    Args:
        prefix: Short kind marker ("course", "ch", "l", "q", "att")

    Returns:
        Prefixed random identifier
    """
    token = uuid.uuid4().hex[:10]
    return f"{prefix}-{token}" if prefix else token
