"""Identifier generation."""

from uuid import uuid4


def generate_id() -> str:
    """Return a new globally unique record identifier."""
    return uuid4().hex
