"""AI-backed event parsing with field-by-field repair from the offline parser."""

import logging
import re
from datetime import datetime
from typing import Any, Awaitable, Callable

from .core.events import (
    EVENT_DURATION,
    LOCAL_FORMAT,
    WEEKLY_RRULE,
    ParsedEvent,
    format_local,
    parse_event_text,
)
from .core.extract import extract_json
from .ports.llm_service import Completion

logger = logging.getLogger(__name__)

EVENT_SYSTEM_PROMPT = (
    "You convert scheduling text to JSON with fields: summary, "
    "startLocal (YYYY-MM-DDTHH:MM), endLocal (YYYY-MM-DDTHH:MM), "
    "recurrenceRRule (FREQ=WEEKLY;BYDAY=XX or empty). Only return JSON."
)

_LOCAL_STAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")

CompleteFn = Callable[[str, str], Awaitable[Completion]]


class AIParseError(Exception):
    """Raised when the AI backend cannot produce a usable event."""

    pass


def _text_field(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _stamp_field(obj: dict, key: str) -> str | None:
    """Timestamp truncated to minutes, or None if it is not YYYY-MM-DDTHH:MM."""
    value = _text_field(obj, key)
    if not value or not _LOCAL_STAMP.match(value):
        return None
    try:
        datetime.strptime(value[:16], LOCAL_FORMAT)
    except ValueError:
        return None
    return value[:16]


def _rrule_field(obj: dict) -> str | None:
    value = obj.get("recurrenceRRule")
    if value == "":
        return ""
    if isinstance(value, str) and WEEKLY_RRULE.match(value.strip().upper()):
        return value.strip().upper()
    return None


def normalize_event(obj: dict[str, Any], fallback: ParsedEvent) -> ParsedEvent:
    """
    Build a ParsedEvent from an AI-supplied object.

    Missing or malformed fields are taken from fallback. An explicit
    empty recurrenceRRule means no recurrence and is kept as-is.
    """
    summary = _text_field(obj, "summary") or fallback.summary
    start_local = _stamp_field(obj, "startLocal") or fallback.start_local
    end_local = _stamp_field(obj, "endLocal") or fallback.end_local
    rrule = _rrule_field(obj)
    if rrule is None:
        rrule = fallback.recurrence_rrule

    if end_local <= start_local:
        start = datetime.strptime(start_local, LOCAL_FORMAT)
        end_local = format_local(start + EVENT_DURATION)

    return ParsedEvent(
        summary=summary,
        start_local=start_local,
        end_local=end_local,
        recurrence_rrule=rrule,
    )


class AIEventParser:
    """
    Event parser backed by an injected completion capability.

    Failures of the capability surface as AIParseError; falling back to
    the offline parser is left to the caller.
    """

    def __init__(
        self,
        complete: CompleteFn,
        now_factory: Callable[[], datetime] = datetime.now,
        system_prompt: str = EVENT_SYSTEM_PROMPT,
    ):
        self.complete = complete
        self.now_factory = now_factory
        self.system_prompt = system_prompt

    async def parse(self, text: str, now: datetime | None = None) -> ParsedEvent:
        """Parse text through the AI backend. Raises AIParseError on failure."""
        now = now or self.now_factory()

        try:
            result = await self.complete(self.system_prompt, text)
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise AIParseError(f"AI parsing failed: {e}") from e

        if not result.ok:
            raise AIParseError(f"AI parsing failed: {result.error or 'no response'}")

        obj = extract_json(result.text)
        if obj is None:
            raise AIParseError("AI returned no JSON")
        if not isinstance(obj, dict):
            raise AIParseError(f"AI returned {type(obj).__name__}, expected an object")

        logger.debug(f"AI event fields: {sorted(obj)}")
        return normalize_event(obj, parse_event_text(text, now))
