"""Week boundaries and week keys.

The week starts at 00:00 local time on Monday; Sunday belongs to the week
that started six days earlier. Everything that needs a week boundary (the
outcome query range, the history key, week membership checks) goes through
this module.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from status_engine.config import WEEK_TIMEZONE

DAYS_PER_WEEK = 7


def local_timezone() -> tzinfo:
    """Timezone whose calendar defines week boundaries."""
    return ZoneInfo(WEEK_TIMEZONE)


def to_local(instant: datetime, tz: tzinfo | None = None) -> datetime:
    """Express *instant* in local time. Naive datetimes are taken as local already."""
    tz = tz or local_timezone()
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone(tz)


def week_start_date(instant: date | datetime, tz: tzinfo | None = None) -> date:
    """Monday of the local calendar week containing *instant*."""
    if isinstance(instant, datetime):
        day = to_local(instant, tz).date()
    else:
        day = instant
    # date.weekday(): Monday == 0, Sunday == 6
    return day - timedelta(days=day.weekday())


def week_start(instant: date | datetime, tz: tzinfo | None = None) -> datetime:
    """Local Monday 00:00 of the week containing *instant* (timezone-aware)."""
    tz = tz or local_timezone()
    return datetime.combine(week_start_date(instant, tz), time(), tzinfo=tz)


def week_bounds(
    instant: date | datetime, tz: tzinfo | None = None
) -> tuple[datetime, datetime]:
    """Half-open range ``[start, end)`` of the week containing *instant*.

    The end is the following Monday's local midnight, so a week spanning a
    DST change is 167 or 169 hours long rather than a fixed 168.
    """
    tz = tz or local_timezone()
    monday = week_start_date(instant, tz)
    start = datetime.combine(monday, time(), tzinfo=tz)
    end = datetime.combine(monday + timedelta(days=DAYS_PER_WEEK), time(), tzinfo=tz)
    return start, end


def week_key(instant: date | datetime, tz: tzinfo | None = None) -> str:
    """Stable identity of the week containing *instant*, e.g. ``"2026-03-02"``."""
    return week_start_date(instant, tz).isoformat()


def in_week(instant: datetime, monday: date, tz: tzinfo | None = None) -> bool:
    """True when *instant* falls inside the week starting on *monday*."""
    return week_start_date(instant, tz) == monday
