"""Functional core - pure parsing logic with no I/O."""

from .weekdays import WEEKDAYS, BYDAY_CODES, find_weekday_token, next_weekday_date
from .events import ParsedEvent, TimeOfDay, parse_event_text, parse_time, infer_summary
from .extract import extract_json
from .due import normalize_due_local, parse_due_or_null, to_iso_from_any
from .tags import extract_tags_from_text, parse_tags_from_string
from .tasks import TaskDraft, parse_task_input

__all__ = [
    # Weekdays
    "WEEKDAYS",
    "BYDAY_CODES",
    "find_weekday_token",
    "next_weekday_date",
    # Events
    "ParsedEvent",
    "TimeOfDay",
    "parse_event_text",
    "parse_time",
    "infer_summary",
    # Extraction
    "extract_json",
    # Due dates
    "normalize_due_local",
    "parse_due_or_null",
    "to_iso_from_any",
    # Tags
    "extract_tags_from_text",
    "parse_tags_from_string",
    # Tasks
    "TaskDraft",
    "parse_task_input",
]
