"""Recover a JSON value from free-text LLM output."""

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def _loads(candidate: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(candidate)
    except (ValueError, RecursionError):
        return False, None


def extract_json(text: Any) -> Any | None:
    """
    Pull a single JSON value out of text.

    Tries, in order: the whole string, the first Markdown fenced block
    (with or without a json tag), and the span from the first "{" to the
    last "}". Returns None when nothing parses. Never raises.
    """
    if text is None:
        return None
    raw = text if isinstance(text, str) else str(text)

    ok, value = _loads(raw)
    if ok:
        return value

    m = _FENCED_BLOCK.search(raw)
    if m:
        ok, value = _loads(m.group(1))
        if ok:
            return value

    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        ok, value = _loads(raw[start : end + 1])
        if ok:
            return value

    return None
