"""Shared timestamp helpers for filesystem metadata and session records."""
from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime.fromtimestamp(0, timezone.utc)


def _format_datetime_utc(value: datetime) -> str:
    dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


def _parse_datetime_token(token: str) -> datetime | None:
    cleaned = token.strip()
    if not cleaned:
        return None
    try:
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in ("%Y/%m/%d", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S"):
        try:
            return datetime.strptime(cleaned, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def parse_record_timestamp(value: Any) -> datetime:
    """Parse a record timestamp, falling back to the Unix epoch.

    Naive values are taken as UTC so every result can be compared and
    subtracted.
    """
    if not isinstance(value, str):
        return EPOCH
    parsed = _parse_datetime_token(value)
    if parsed is None:
        return EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def mtime_millis(stats: os.stat_result) -> int:
    """Modification time in whole milliseconds since the Unix epoch."""
    return max(0, stats.st_mtime_ns // 1_000_000)


def millis_to_iso(value: int) -> str:
    return _format_datetime_utc(datetime.fromtimestamp(value / 1000, timezone.utc))


def duration_millis(start: datetime, end: datetime) -> int:
    return int(round((end - start).total_seconds() * 1000))
