from __future__ import annotations

from datetime import datetime

from version_gate.utils.clock import as_utc

SECONDS_PER_HOUR = 3600


def should_refresh(now: datetime, last_fetch: datetime | None, interval_seconds: float) -> bool:
    """Return True when a new fetch is due.

    No recorded fetch always refreshes. A ``last_fetch`` in the future
    (negative elapsed time) is treated as stale. The interval boundary is
    inclusive. Naive datetimes on either side are read as UTC.
    """
    if last_fetch is None:
        return True
    elapsed = (as_utc(now) - as_utc(last_fetch)).total_seconds()
    return elapsed < 0 or elapsed >= interval_seconds


def interval_seconds_for(hours: int) -> float:
    return float(hours) * SECONDS_PER_HOUR
