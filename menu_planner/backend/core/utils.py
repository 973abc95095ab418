"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Return a fresh UUID4 identifier as a string."""
    return str(uuid4())


def contains_casefold(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test that treats None as no match."""
    if haystack is None:
        return False
    return needle.casefold() in haystack.casefold()
