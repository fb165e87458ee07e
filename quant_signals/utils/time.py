"""
Millisecond timestamp helpers.

Bars and evidence carry epoch milliseconds; these helpers convert to and
from timezone-aware datetimes and bucket timestamps into evaluation windows.
"""

import time
from datetime import datetime, timezone
from typing import Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def ms_to_datetime(ts_ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc)


def datetime_to_ms(dt: datetime) -> int:
    """
    Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def window_bucket(ts_ms: int, window_ms: int) -> int:
    """
    Index of the fixed-size window that contains ts_ms.

    Two timestamps share an evaluation window iff their buckets are equal.
    """
    if window_ms <= 0:
        raise ValueError(f"window_ms must be positive, got {window_ms}")
    return ts_ms // window_ms


def is_within(ts_ms: int, start_ms: Optional[int] = None, end_ms: Optional[int] = None) -> bool:
    """Check start <= ts <= end, with open bounds when None."""
    if start_ms is not None and ts_ms < start_ms:
        return False
    if end_ms is not None and ts_ms > end_ms:
        return False
    return True


def format_timestamp(ts_ms: int) -> str:
    """ISO8601 rendering of a millisecond timestamp for logs and payloads."""
    return ms_to_datetime(ts_ms).isoformat()
