"""Datetime formatting utilities for consistent, user-friendly display."""

from __future__ import annotations

from datetime import datetime, timezone

# Fixed, universal, user-friendly format: "YYYY-MM-DD HH:MM UTC"
# We always render timestamps in UTC to avoid locale/timezone ambiguity.
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M UTC"


def now_local_label() -> str:
    """Return the current local time, used in default note titles.

    Example: "2025-01-31 09:15:00"
    """

    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def from_epoch_millis(value: int) -> datetime:
    """Convert service timestamps (milliseconds since epoch) to UTC datetimes."""

    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def to_user_friendly_utc(dt: datetime) -> str:
    """Format the provided aware ``datetime`` in UTC using a friendly format."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(_DISPLAY_FORMAT)
