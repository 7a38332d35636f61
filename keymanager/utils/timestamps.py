"""Timestamp helpers shared by models and repositories."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db(value: Optional[datetime]) -> Optional[str]:
    """Serialize to fixed-width ISO-8601 so text ordering matches time ordering."""
    if value is None:
        return None
    return ensure_utc(value).isoformat(timespec='microseconds')


def from_db(value: Optional[str]) -> Optional[datetime]:
    if value is None or value == '':
        return None
    return ensure_utc(datetime.fromisoformat(value))


def to_json(value: Optional[datetime]) -> Optional[str]:
    return ensure_utc(value).isoformat() if value else None
