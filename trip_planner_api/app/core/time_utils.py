"""Helpers for the naive wall-clock timestamps used by plans and places."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from .config import settings


STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def to_local_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Return ``dt`` as a naive datetime in the trip time zone.

    Naive values are taken as already local.  Aware values are converted
    to ``settings.calendar_time_zone`` before the offset is dropped.
    Microseconds are truncated so stored values compare cleanly.
    """
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(ZoneInfo(settings.calendar_time_zone)).replace(tzinfo=None)
    return dt.replace(microsecond=0)


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.strftime(STORAGE_FORMAT)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)
