"""Hashtag helpers for task text."""

import re

_TAG = re.compile(r"#[a-z0-9_-]+", re.IGNORECASE)


def extract_tags_from_text(text: str | None) -> tuple[str, list[str]]:
    """
    Split "#tag" tokens out of text.

    Returns: (clean_text, tags) with tags lower-cased and de-duplicated.
    """
    raw = text or ""
    tags = list(dict.fromkeys(m.group(0)[1:].lower() for m in _TAG.finditer(raw)))
    clean = re.sub(r"\s+", " ", _TAG.sub("", raw)).strip()
    return clean, tags


def parse_tags_from_string(value: str | None) -> list[str]:
    """Parse a "#bug urgent, backlog" style tag field into ["bug", "urgent", "backlog"]."""
    words = re.split(r"[\s,]+", (value or "").strip())
    cleaned = (w[1:] if w.startswith("#") else w for w in words)
    return list(dict.fromkeys(w.strip().lower() for w in cleaned if w.strip()))
