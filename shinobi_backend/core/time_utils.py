# shinobi_backend/core/time_utils.py
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every datetime column is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def seconds_passed(since: Optional[datetime], now: Optional[datetime] = None) -> float:
    """
    Seconds elapsed between `since` and `now`.
    Clock skew (since in the future) counts as zero, a missing timestamp as zero.
    """
    if since is None:
        return 0.0
    now = now or utcnow()
    return max((now - since).total_seconds(), 0.0)
