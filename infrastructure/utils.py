"""Utilities for parsing and formatting store timestamps.

Store rows carry ISO-8601 timestamps (PostgREST style, e.g.
``2024-05-01T10:20:30.123456+00:00``). Parsing is best-effort and never
raises; callers should expect `None` when a value is unusable.
"""

from __future__ import annotations

from datetime import datetime, timezone

from loguru import logger

DISPLAY_DATE_FMT = "%Y-%m-%d"


def parse_store_datetime(value: object) -> datetime | None:
    """Parse an ISO timestamp from the store into an aware datetime.

    Naive values are assumed to be UTC. A trailing ``Z`` is accepted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as ex:
            logger.debug("Unparsable store timestamp {!r}: {}", value, ex)
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_display_date(dt: datetime | None) -> str:
    """Format a timestamp as a local calendar date; empty string when None."""
    try:
        return dt.astimezone().strftime(DISPLAY_DATE_FMT) if dt else ""
    except (ValueError, OverflowError, OSError):
        return ""
