"""
Date helpers shared by the drift and streak engines.

Every day-difference in Homebase is computed on local calendar days:
both instants are moved into the configured timezone and truncated to
midnight before subtracting. Comparing raw timestamps instead gives
off-by-one results whenever the time of day differs.
"""
from datetime import date, datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from config.settings import settings


def get_local_timezone() -> ZoneInfo:
    """Timezone used for day boundaries (HOMEBASE_TIMEZONE)."""
    return ZoneInfo(settings.timezone)


def to_local(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Express a timestamp in the local timezone.

    Naive datetimes are wall-clock times already, so they get the zone
    attached; aware datetimes are converted.
    """
    tz = tz or get_local_timezone()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def local_day(dt: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day the timestamp falls on, in the local timezone."""
    return to_local(dt, tz).date()


def start_of_day(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Local midnight at the start of the timestamp's day."""
    tz = tz or get_local_timezone()
    return datetime.combine(local_day(dt, tz), time.min, tzinfo=tz)


def days_between(later: datetime, earlier: datetime, tz: Optional[tzinfo] = None) -> int:
    """
    Whole calendar days from `earlier` to `later`.

    Negative when `later` is actually before `earlier`.
    """
    return (local_day(later, tz) - local_day(earlier, tz)).days


def days_from_now(dt: datetime, now: datetime, tz: Optional[tzinfo] = None) -> int:
    """Calendar days until `dt` (negative for the past)."""
    return days_between(dt, now, tz)


def is_same_day(a: datetime, b: datetime, tz: Optional[tzinfo] = None) -> bool:
    return local_day(a, tz) == local_day(b, tz)


def format_date(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as 'Mar 5, 2026'."""
    local = to_local(dt, tz)
    return f"{local:%b} {local.day}, {local.year}"


def format_time(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as '9:05 AM'."""
    local = to_local(dt, tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_date_time(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as 'Mar 5, 2026 at 9:05 AM'."""
    return f"{format_date(dt, tz)} at {format_time(dt, tz)}"
