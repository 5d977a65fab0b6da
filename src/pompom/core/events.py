"""Pure event parsing logic - turns scheduling text into a ParsedEvent."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .weekdays import BYDAY_CODES, WEEKDAY_ALTERNATION, find_weekday_token, next_weekday_date

LOCAL_FORMAT = "%Y-%m-%dT%H:%M"
DEFAULT_SUMMARY = "New Event"
DEFAULT_EVENT_TIME = (9, 0)
EVENT_DURATION = timedelta(minutes=60)

WEEKLY_RRULE = re.compile(r"^FREQ=WEEKLY;BYDAY=(SU|MO|TU|WE|TH|FR|SA)$")

_AMPM_TIME = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b")
_24H_TIME = re.compile(r"\b(\d{1,2}):(\d{2})\b")
_TOMORROW = re.compile(r"\btomorrow\b")
_TODAY = re.compile(r"\btoday\b")
_WEEKLY = re.compile(r"\bweekly\b")

_SUMMARY_FILLERS = re.compile(r"\b(today|tomorrow|at|on)\b", re.IGNORECASE)
_SUMMARY_WEEKDAYS = re.compile(rf"\b({WEEKDAY_ALTERNATION})\b", re.IGNORECASE)
_SUMMARY_TIMES = re.compile(r"\b(\d{1,2})(?::\d{2})?\s*(am|pm)?\b", re.IGNORECASE)


@dataclass(frozen=True)
class TimeOfDay:
    """Wall-clock time recognized in text."""

    hours: int
    minutes: int


@dataclass(frozen=True)
class ParsedEvent:
    """A calendar event recovered from free text."""

    summary: str
    start_local: str
    end_local: str
    recurrence_rrule: str = ""

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence_rrule)

    def start(self) -> datetime:
        return datetime.strptime(self.start_local, LOCAL_FORMAT)

    def end(self) -> datetime:
        return datetime.strptime(self.end_local, LOCAL_FORMAT)

    def duration_minutes(self) -> int:
        return int((self.end() - self.start()).total_seconds() / 60)

    def to_dict(self) -> dict:
        """Wire shape shared with the UI and the AI prompt."""
        return {
            "summary": self.summary,
            "startLocal": self.start_local,
            "endLocal": self.end_local,
            "recurrenceRRule": self.recurrence_rrule,
        }


def format_local(dt: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM (no seconds, no offset)."""
    return dt.strftime(LOCAL_FORMAT)


def _time_from_match(hours: int, minutes: int) -> TimeOfDay | None:
    if 0 <= hours <= 23 and 0 <= minutes <= 59:
        return TimeOfDay(hours, minutes)
    return None


def parse_time(text: str | None) -> TimeOfDay | None:
    """
    Find a time of day in text.

    The first am/pm token wins; failing that, the first H:MM token.
    Returns None when neither is present.
    """
    lower = (text or "").lower()

    m = _AMPM_TIME.search(lower)
    if m:
        hours = int(m.group(1))
        minutes = int(m.group(2)) if m.group(2) else 0
        if m.group(3) == "pm" and hours < 12:
            hours += 12
        if m.group(3) == "am" and hours == 12:
            hours = 0
        found = _time_from_match(hours, minutes)
        if found:
            return found

    m = _24H_TIME.search(lower)
    if m:
        return _time_from_match(int(m.group(1)), int(m.group(2)))
    return None


def at_time(day: date, time_of_day: TimeOfDay, tzinfo=None) -> datetime:
    """Combine a date with a time of day at zero seconds."""
    return datetime.combine(day, time(time_of_day.hours, time_of_day.minutes), tzinfo=tzinfo)


def infer_summary(text: str | None) -> str:
    """Strip date/time words from text, leaving a title."""
    cleaned = _SUMMARY_FILLERS.sub(" ", text or "")
    cleaned = _SUMMARY_WEEKDAYS.sub(" ", cleaned)
    cleaned = _SUMMARY_TIMES.sub(" ", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or DEFAULT_SUMMARY


def parse_event_text(text: str | None, now: datetime | None = None) -> ParsedEvent:
    """
    Parse scheduling text into a ParsedEvent.

    Pure function - no I/O. Never raises; missing signals fall back to
    09:00 on now's date, a 60 minute duration and no recurrence.

    Args:
        text: Free text such as "Weekly Group Meeting Monday at 2pm"
        now: Reference instant (defaults to the local wall clock)
    """
    now = now or datetime.now()
    lower = (text or "").lower()
    weekday = find_weekday_token(lower)
    time_of_day = parse_time(lower) or TimeOfDay(*DEFAULT_EVENT_TIME)

    day = now.date()
    try:
        if _TOMORROW.search(lower):
            day = now.date() + timedelta(days=1)
        elif weekday is not None and not _TODAY.search(lower):
            day = next_weekday_date(now.date(), weekday)
    except OverflowError:
        # Past date.max; keep now's date.
        pass

    start = at_time(day, time_of_day, tzinfo=now.tzinfo)
    try:
        end = start + EVENT_DURATION
    except OverflowError:
        end = datetime.max.replace(second=0, microsecond=0, tzinfo=now.tzinfo)

    rrule = ""
    if _WEEKLY.search(lower) and weekday is not None:
        rrule = f"FREQ=WEEKLY;BYDAY={BYDAY_CODES[weekday]}"

    return ParsedEvent(
        summary=infer_summary(text),
        start_local=format_local(start),
        end_local=format_local(end),
        recurrence_rrule=rrule,
    )
