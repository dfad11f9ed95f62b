"""Recency scoring and human-friendly ages.

Anything touched within the last hour gets the full RECENCY_FLOOR +
RECENCY_SPAN. After that the score decays with the square root of the
hours elapsed, so minutes matter more than days and days more than
weeks. Projects with no usable timestamp sit exactly on the floor,
below any real timestamp, but are never excluded.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

RECENCY_FLOOR = 0.1
RECENCY_SPAN = 5.0
RECENCY_MAX = RECENCY_FLOOR + RECENCY_SPAN


def as_utc(timestamp: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def hours_since(timestamp: datetime, now: datetime) -> float:
    return (as_utc(now) - as_utc(timestamp)).total_seconds() / 3600


def recency_score(last_accessed: datetime | None, now: datetime) -> float:
    """Score how recently a project was used.

    Returns RECENCY_FLOOR when last_accessed is missing or unusable.
    """
    if not isinstance(last_accessed, datetime):
        return RECENCY_FLOOR
    try:
        hours = hours_since(last_accessed, now)
    except (OverflowError, ValueError):
        return RECENCY_FLOOR

    # Clock skew can put timestamps in the future; treat as "just now"
    hours = max(hours, 1.0)
    return RECENCY_FLOOR + RECENCY_SPAN / math.sqrt(hours)


def format_relative_time(timestamp: datetime | None, now: datetime) -> str:
    """Compact age display: "now", "5m", "2h", "3d", "2w", "4mo", "1y"."""
    if not isinstance(timestamp, datetime):
        return "never"
    try:
        seconds = int((as_utc(now) - as_utc(timestamp)).total_seconds())
    except (OverflowError, ValueError):
        return "never"

    if seconds < 60:
        return "now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    days = hours // 24
    if days < 14:
        return f"{days}d"
    if days < 60:
        return f"{days // 7}w"
    if days < 365:
        return f"{days // 30}mo"
    return f"{days // 365}y"
