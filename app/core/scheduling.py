"""Interview slot and invite token helpers."""

import uuid
from datetime import datetime, timedelta

DEFAULT_SLOT_MINUTES = 15


def generate_token() -> str:
    """Invite token: a uuid4 without dashes (32 hex chars)."""
    return uuid.uuid4().hex


def parse_datetime(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp as stored by Supabase (accepts a trailing Z)."""
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def generate_time_slots(
    start: str | datetime,
    end: str | datetime,
    duration_minutes: int = DEFAULT_SLOT_MINUTES,
) -> list[datetime]:
    """
    Split an interview window into back-to-back slots.

    The window is half-open: a slot starting exactly at ``end`` is not offered,
    but the last slot may run past ``end``.

    Raises:
        ValueError: If duration_minutes is not positive
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    start_dt = parse_datetime(start)
    end_dt = parse_datetime(end)
    step = timedelta(minutes=duration_minutes)

    slots = []
    current = start_dt
    while current < end_dt:
        slots.append(current)
        current = current + step
    return slots
