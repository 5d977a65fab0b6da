"""Task due-date normalization - the task-side counterpart of event parsing."""

import logging
import re
from datetime import datetime, timedelta, timezone

from dateutil import parser as dateutil_parser

from .events import TimeOfDay, at_time, format_local, parse_time
from .weekdays import WEEKDAY_ALTERNATION, find_weekday_token, next_weekday_date

logger = logging.getLogger(__name__)

DEFAULT_DUE_TIME = TimeOfDay(17, 0)

# Leap years, differing month and day.
_SENTINEL_DEFAULTS = (datetime(2000, 1, 1, 17, 0), datetime(2004, 2, 2, 17, 0))

_TODAY = re.compile(r"\btoday\b")
_TOMORROW = re.compile(r"\btomorrow\b")
_IN_DAYS = re.compile(r"\bin\s+(\d+)\s+days?\b")
_IN_HOURS = re.compile(r"\bin\s+(\d+)\s+hours?\b")
_LOCAL_STAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")
_DUE_SIGNAL = re.compile(
    rf"\btoday\b|\btomorrow\b|\bin\s+\d+\s+(days?|hours?)\b|\b({WEEKDAY_ALTERNATION})\b"
)


def _to_local(dt: datetime, now: datetime) -> datetime:
    """Express an aware datetime on now's clock; naive values pass through."""
    if dt.tzinfo is None:
        return dt
    if now.tzinfo is None:
        return dt.astimezone().replace(tzinfo=None)
    return dt.astimezone(now.tzinfo)


def _parse_generic(text: str, now: datetime) -> datetime | None:
    """
    Parse text with dateutil, or None when it carries no month and day.

    dateutil fills missing fields from its default, so text is parsed
    against two unrelated defaults first; if month or day follow the default
    the text named no date ("3pm", "10").
    """
    try:
        first = dateutil_parser.parse(text, default=_SENTINEL_DEFAULTS[0])
        second = dateutil_parser.parse(text, default=_SENTINEL_DEFAULTS[1])
        if (first.month, first.day) != (second.month, second.day):
            return None
        default = now.replace(
            hour=DEFAULT_DUE_TIME.hours, minute=DEFAULT_DUE_TIME.minutes, second=0, microsecond=0
        )
        return _to_local(dateutil_parser.parse(text, default=default), now)
    except (ValueError, OverflowError):
        return None


def _relative_due(lower: str, now: datetime, explicit: TimeOfDay | None) -> datetime | None:
    """Resolve "in N days" / "in N hours", or None when absent or out of range."""
    try:
        m = _IN_DAYS.search(lower)
        if m:
            day = now.date() + timedelta(days=int(m.group(1)))
            return at_time(day, explicit or DEFAULT_DUE_TIME, now.tzinfo)

        m = _IN_HOURS.search(lower)
        if m:
            shifted = now + timedelta(hours=int(m.group(1)))
            if explicit:
                shifted = at_time(shifted.date(), explicit, now.tzinfo)
            return shifted
    except OverflowError:
        logger.debug(f"Relative due date out of range in {lower!r}")
    return None


def _tomorrow(now: datetime, time_of_day: TimeOfDay) -> datetime:
    try:
        day = now.date() + timedelta(days=1)
    except OverflowError:
        day = now.date()
    return at_time(day, time_of_day, now.tzinfo)


def normalize_due_local(text: str | None, now: datetime | None = None) -> str:
    """
    Resolve due-date text to a local YYYY-MM-DDTHH:MM timestamp.

    Recognizes today, tomorrow, "in N days", "in N hours" and weekday
    names (next occurrence, never today). The time of day comes from an
    explicit time token or defaults to 17:00. Anything else is handed to
    dateutil; if that finds no date the result is tomorrow at 17:00.
    """
    now = now or datetime.now()
    lower = (text or "").strip().lower()
    explicit = parse_time(lower)
    time_of_day = explicit or DEFAULT_DUE_TIME

    if _TODAY.search(lower):
        return format_local(at_time(now.date(), time_of_day, now.tzinfo))

    if _TOMORROW.search(lower):
        return format_local(_tomorrow(now, time_of_day))

    relative = _relative_due(lower, now, explicit)
    if relative:
        return format_local(relative)

    weekday = find_weekday_token(lower)
    if weekday is not None:
        try:
            return format_local(at_time(next_weekday_date(now.date(), weekday), time_of_day, now.tzinfo))
        except OverflowError:
            pass

    if lower:
        parsed = _parse_generic(text.strip(), now)
        if parsed:
            return format_local(parsed)
        logger.debug(f"No due date recognized in {text!r}, defaulting to tomorrow")

    return format_local(_tomorrow(now, DEFAULT_DUE_TIME))


def parse_due_or_null(text: str | None, now: datetime | None = None) -> str | None:
    """Normalized due date, or None when text carries no date signal."""
    if not _DUE_SIGNAL.search((text or "").lower()):
        return None
    return normalize_due_local(text, now)


def to_iso_from_any(text: str | None) -> str:
    """
    Convert a local timestamp or any dateutil-parseable string to UTC ISO-8601.

    Naive values are read as local time. Returns "" for empty or
    unparseable input.
    """
    if not text:
        return ""
    value = text.strip()

    parsed = None
    if _LOCAL_STAMP.match(value):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            parsed = None
    if parsed is None:
        try:
            parsed = dateutil_parser.parse(value)
        except (ValueError, OverflowError):
            return ""

    try:
        utc = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError):
        return ""
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
