"""
Time Source

Every age-based score and every lifecycle transition reads "now" from an
injected clock instead of calling datetime.now() directly. Production code
passes nothing and gets utc_now(); tests pass a fixed clock.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to a naive datetime.

    SQLite drops tzinfo on round trip, so timestamps loaded back from the
    test database come out naive even though they were stored as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def age_in_days(created_at: datetime | None, now: datetime) -> int:
    """Whole days elapsed since created_at (0 when unknown)."""
    if created_at is None:
        return 0
    return (ensure_utc(now) - ensure_utc(created_at)).days


def hours_between(start: datetime, end: datetime) -> float:
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 3600
