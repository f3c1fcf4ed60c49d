"""
Elapsed-time computations over stored timestamps.

SQLite hands back naive datetimes even for timezone-aware columns, so every
function here normalizes through ``as_utc`` before doing arithmetic.
"""
import math
from datetime import date, datetime, time, timezone, tzinfo
from typing import Iterable, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from .. import config

SECONDS_PER_DAY = 24 * 60 * 60

PLAN_STATUS_UNKNOWN = "Unknown"
PLAN_STATUS_EXPIRED = "Expired"
PLAN_STATUS_EXPIRING_SOON = "Expiring Soon"
PLAN_STATUS_ACTIVE = "Active"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_zone(tz: Union[str, tzinfo, None] = None) -> tzinfo:
    """Resolve a timezone name (default: the report timezone)."""
    if tz is None:
        tz = config.REPORT_TIMEZONE
    if isinstance(tz, tzinfo):
        return tz
    if tz.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(tz)


def elapsed_seconds(start: datetime, end: Optional[datetime] = None,
                    now: Optional[datetime] = None) -> int:
    """
    Whole seconds between ``start`` and ``end``.

    When ``end`` is missing the interval is still open and runs to ``now``
    (the current time by default). Never negative.
    """
    stop = end if end is not None else (now if now is not None else utcnow())
    delta = (as_utc(stop) - as_utc(start)).total_seconds()
    return max(0, int(math.floor(delta)))


def format_duration(seconds: int) -> str:
    """Render seconds as ``HH:MM:SS``."""
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def local_today(tz: Union[str, tzinfo, None] = None, now: Optional[datetime] = None) -> date:
    current = as_utc(now) if now is not None else utcnow()
    return current.astimezone(get_zone(tz)).date()


def day_bounds(day: date, tz: Union[str, tzinfo, None] = None) -> Tuple[datetime, datetime]:
    """
    First and last instant of a local calendar day, expressed in UTC.

    Args:
        day: Calendar day in the given timezone
        tz: Timezone name or tzinfo (default: report timezone)

    Returns:
        Tuple[datetime, datetime]: ``00:00:00.000000`` and ``23:59:59.999999``
    """
    zone = get_zone(tz)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day, time.max, tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def session_seconds(session, now: Optional[datetime] = None) -> int:
    """Duration of a work session; open sessions run to ``now``."""
    if session.duration_seconds is not None:
        return session.duration_seconds
    return elapsed_seconds(session.start_time, session.end_time, now=now)


def _completed(sessions: Iterable) -> List:
    return [s for s in sessions if s.end_time is not None]


def hours_worked(sessions: Iterable) -> float:
    """Total hours across completed sessions, rounded to two places."""
    total = sum(session_seconds(s) for s in _completed(sessions))
    return round(total / 3600.0, 2)


def daily_hours(sessions: Iterable, tz: Union[str, tzinfo, None] = None) -> List[Tuple[date, float]]:
    """
    Hours worked per local calendar day, ordered by day.

    A session counts toward the day it started on.
    """
    zone = get_zone(tz)
    totals = {}
    for session in _completed(sessions):
        day = as_utc(session.start_time).astimezone(zone).date()
        totals[day] = totals.get(day, 0) + session_seconds(session)
    return [(day, round(seconds / 3600.0, 2)) for day, seconds in sorted(totals.items())]


def plan_status(plan_end_date: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Classify a client plan by days left until its end date.

    Days are rounded up, so a plan ending later today still has one day
    left. Zero or fewer days is expired; up to the warning window is
    expiring soon.
    """
    if plan_end_date is None:
        return PLAN_STATUS_UNKNOWN
    current = as_utc(now) if now is not None else utcnow()
    diff = (as_utc(plan_end_date) - current).total_seconds()
    days_left = math.ceil(diff / SECONDS_PER_DAY)
    if days_left <= 0:
        return PLAN_STATUS_EXPIRED
    if days_left <= config.PLAN_EXPIRING_SOON_DAYS:
        return PLAN_STATUS_EXPIRING_SOON
    return PLAN_STATUS_ACTIVE
