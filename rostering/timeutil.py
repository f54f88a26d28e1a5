import re
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rostering.errors import ValidationError

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^\d{2}:\d{2}$")

WEEKDAY_CODES = ["MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"]


def parse_date(value: str) -> date:
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValidationError("Invalid date format; expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")


def minutes_of_day(value: str) -> int:
    """'HH:MM' -> minutes since local midnight."""
    if not isinstance(value, str) or not TIME_RE.match(value):
        raise ValidationError("Invalid time format; expected HH:MM")
    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Invalid time: {value}")
    return hours * 60 + minutes


def get_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        raise ValidationError(f"Unknown timezone: {tz_name}")


def to_instant(day, local_time: str, tz_name: str) -> datetime:
    """
    Interpret a wall-clock time on a calendar day in an IANA timezone and
    return the same instant as an aware UTC datetime. The UTC offset is the
    one in force in that timezone on that date, so DST is honoured.
    """
    if isinstance(day, str):
        day = parse_date(day)
    total = minutes_of_day(local_time)
    local = datetime(day.year, day.month, day.day, total // 60, total % 60, tzinfo=get_zone(tz_name))
    return local.astimezone(timezone.utc)


def day_bounds(day, tz_name: str) -> tuple[datetime, datetime]:
    """Local midnight to next local midnight, as UTC instants."""
    if isinstance(day, str):
        day = parse_date(day)
    start = to_instant(day, "00:00", tz_name)
    end = to_instant(day + timedelta(days=1), "00:00", tz_name)
    return start, end


def weekday_code(day) -> str:
    if isinstance(day, str):
        day = parse_date(day)
    return WEEKDAY_CODES[day.weekday()]


def add_minutes(instant: datetime, n: int) -> datetime:
    return instant + timedelta(minutes=n)


def minutes_between(a: datetime, b: datetime) -> int:
    return int((b - a).total_seconds() // 60)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # half-open intervals: touching ends do not overlap
    return a_start < b_end and b_start < a_end


def to_storage(instant: datetime) -> datetime:
    """Aware instant -> naive UTC for DateTime columns."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
