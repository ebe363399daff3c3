from __future__ import annotations

from datetime import datetime

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def to_local(dt: datetime) -> datetime:
    """Return *dt* in the server's local time zone.

    Naive timestamps are taken as already local.
    """
    return dt.astimezone()


def month_key(dt: datetime) -> str:
    local = to_local(dt)
    return f"{local.year}-{local.month:02d}"


def weekday_index(dt: datetime) -> int:
    """Sunday=0 ... Saturday=6."""
    return (to_local(dt).weekday() + 1) % 7


def days_since(dt: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed from *dt* to *now*, floored."""
    now = now or datetime.now()
    return (to_local(now) - to_local(dt)).days
