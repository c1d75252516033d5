"""UTC timestamp helpers.

Timestamps are frozen to strings at capture time: ISO-8601, UTC, microsecond
precision and a trailing ``Z`` (e.g. ``"2025-11-12T02:02:37.104512Z"``). Strings
of this shape sort chronologically, which keeps history ordering checks trivial.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as an ISO-8601 UTC string ending in ``Z``."""
    moment = moment if moment is not None else utc_now()
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


__all__ = ["utc_now", "utc_timestamp"]
