"""Timestamp normalization for transaction ordering.

All points in time are reduced to integer milliseconds since the Unix epoch
(UTC). Strings are parsed as ISO-8601; values without an explicit offset are
read as UTC so that the same input yields the same key on every host.
Nothing here raises on bad input: unparseable values become ``None`` and the
caller decides what that means.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta
from typing import Any

# Creation-time placeholder that sorts after every real ISO timestamp.
FAR_FUTURE_TIMESTAMP = "9999-12-31T23:59:59.999Z"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def parse_date(value: Any) -> datetime | None:
    """Parse ``value`` into an aware ``datetime`` or return ``None``.

    Accepts ISO-8601 strings (``2025-03-15``, ``2025-03-15T10:30:00Z``,
    ``2025-03-15T10:30:00.000+02:00``) as well as ``datetime``/``date``
    instances. Naive values are treated as UTC.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def to_epoch_millis(dt: datetime) -> int:
    """Return ``dt`` as whole milliseconds since the epoch (floored)."""

    return (dt - _EPOCH) // _ONE_MS


def timestamp_or_null(value: Any) -> int | float | None:
    """Normalize ``value`` to epoch milliseconds, or ``None`` when unusable.

    - ``None`` -> ``None``
    - numbers -> returned unchanged (assumed to be epoch milliseconds already)
    - strings, ``datetime`` and ``date`` -> parsed epoch milliseconds, or
      ``None`` when parsing fails (including the empty string)
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    parsed = parse_date(value)
    if parsed is None:
        return None
    return to_epoch_millis(parsed)


def format_epoch_millis(ms: int | float) -> str | None:
    """Format epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.sssZ`` in UTC.

    Fractional milliseconds are truncated. Returns ``None`` for values that
    cannot be represented as a calendar instant (non-finite or out of range).
    """

    try:
        dt = _EPOCH + timedelta(milliseconds=math.trunc(ms))
    except (OverflowError, ValueError):
        return None
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )


__all__ = [
    "FAR_FUTURE_TIMESTAMP",
    "format_epoch_millis",
    "parse_date",
    "timestamp_or_null",
    "to_epoch_millis",
]
