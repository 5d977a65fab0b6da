"""Weekday lookup shared by the event parser and the due-date helpers."""

import re
from datetime import date, timedelta
from types import MappingProxyType

# 0 = Sunday ... 6 = Saturday. Scanned in declaration order.
WEEKDAYS = MappingProxyType(
    {
        "sunday": 0,
        "sun": 0,
        "monday": 1,
        "mon": 1,
        "tuesday": 2,
        "tue": 2,
        "tues": 2,
        "wednesday": 3,
        "wed": 3,
        "thursday": 4,
        "thu": 4,
        "thur": 4,
        "thurs": 4,
        "friday": 5,
        "fri": 5,
        "saturday": 6,
        "sat": 6,
    }
)

BYDAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

WEEKDAY_ALTERNATION = "|".join(sorted(WEEKDAYS, key=len, reverse=True))

_TOKEN_PATTERNS = tuple((name, re.compile(rf"\b{name}\b")) for name in WEEKDAYS)


def find_weekday_token(text: str | None) -> int | None:
    """Return the weekday index (0=Sunday) of the first known name in text."""
    lower = (text or "").lower()
    for name, pattern in _TOKEN_PATTERNS:
        if pattern.search(lower):
            return WEEKDAYS[name]
    return None


def sunday_index(d: date) -> int:
    """Weekday of d with Sunday as 0."""
    return (d.weekday() + 1) % 7


def next_weekday_date(today: date, weekday: int) -> date:
    """
    Next date falling on weekday, strictly after today.

    If today already is that weekday the result is a full week later.
    """
    diff = (weekday - sunday_index(today) + 7) % 7
    if diff == 0:
        diff = 7
    return today + timedelta(days=diff)
