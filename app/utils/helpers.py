"""
Small helpers shared by the registries: id generation, date and time normalization.
"""

import uuid
from datetime import date, datetime
from typing import Union

from app.core.errors import InvalidInputError


def new_id(prefix: str) -> str:
    """Short unique id, e.g. 'slot-3f9c2a1b7d4e'."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def parse_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or an ISO string; anything else is InvalidInputError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        # Full ISO timestamps ("2025-03-03T09:00:00") are accepted, trailing junk is not
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid date: {value!r}")


def normalize_time(value: str, field: str) -> str:
    """Strip separators ("09:30" -> "0930"). Only emptiness is rejected here."""
    normalized = (value or "").strip().replace(":", "")
    if not normalized:
        raise InvalidInputError(f"{field} must not be empty")
    return normalized
