"""PomPom - natural language scheduling for the team productivity app."""

from .ai_parser import AIEventParser, AIParseError
from .core import (
    ParsedEvent,
    TaskDraft,
    extract_json,
    extract_tags_from_text,
    normalize_due_local,
    parse_due_or_null,
    parse_event_text,
    parse_tags_from_string,
    parse_task_input,
    to_iso_from_any,
)

__all__ = [
    "AIEventParser",
    "AIParseError",
    "ParsedEvent",
    "TaskDraft",
    "extract_json",
    "extract_tags_from_text",
    "normalize_due_local",
    "parse_due_or_null",
    "parse_event_text",
    "parse_tags_from_string",
    "parse_task_input",
    "to_iso_from_any",
]
