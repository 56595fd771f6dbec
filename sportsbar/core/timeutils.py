"""
Time helpers shared by both storage adapters

Timestamps are stored as naive UTC. "Today" is the calendar day of the
server's local timezone.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_time(value: datetime) -> datetime:
    """Normalise a datetime to naive UTC; naive values are taken as UTC already"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _local_midnight(day: date) -> datetime:
    # astimezone() on a naive value resolves the local offset for that date
    return datetime.combine(day, time.min).astimezone()


def today_window(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return the half-open range [start of local day, start of next local day)

    Both bounds are naive UTC so they compare directly against stored values.
    A naive ``now`` is read as UTC, like every other naive timestamp here.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_now = now.astimezone()
    today = local_now.date()
    start = _local_midnight(today)
    end = _local_midnight(today + timedelta(days=1))
    return to_storage_time(start), to_storage_time(end)
