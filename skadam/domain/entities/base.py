"""
Shared helpers for domain entities: identifiers and timestamps.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time, timezone-aware UTC"""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Opaque unique entity identifier"""
    return uuid.uuid4().hex


def dump_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def load_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return as_utc(datetime.fromisoformat(value))
