"""Shared workflow layer between the CLI and other front ends.

Picks the configured completion backend and decides whether an AI
failure falls back to the offline parser.
"""

import asyncio
import logging
from datetime import datetime

from .adapters.claude_cli import ClaudeCLIService
from .adapters.groq_proxy import GroqProxyService
from .ai_parser import AIEventParser, AIParseError
from .config import POMPOM_HOME, Config
from .core.events import ParsedEvent, parse_event_text
from .ports.llm_service import CompletionService

logger = logging.getLogger(__name__)


def get_completion_service(config: Config) -> CompletionService:
    """Build the completion adapter named by config.ai_backend."""
    match config.ai_backend:
        case "groq":
            return GroqProxyService(
                url=config.ai_proxy_url,
                model=config.ai_model,
                api_key=config.ai_api_key,
                temperature=config.ai_temperature,
                max_tokens=config.ai_max_tokens,
                timeout=config.ai_timeout,
            )
        case "claude":
            return ClaudeCLIService(cwd=POMPOM_HOME if POMPOM_HOME.exists() else None, timeout=config.ai_timeout)
        case other:
            raise ValueError(f"Unknown AI backend: {other!r} (expected 'groq' or 'claude')")


async def parse_event_with_ai(
    text: str,
    config: Config,
    now: datetime | None = None,
    fallback: bool | None = None,
    service: CompletionService | None = None,
) -> ParsedEvent:
    """
    Parse text through the AI backend.

    With fallback enabled (config.ai_fallback_local unless overridden),
    an AIParseError yields the offline parse instead of propagating.
    """
    fallback = config.ai_fallback_local if fallback is None else fallback
    service = service or get_completion_service(config)
    parser = AIEventParser(service.complete)
    try:
        return await parser.parse(text, now)
    except AIParseError as e:
        if not fallback:
            raise
        logger.warning(f"{e}; using local parser")
        return parse_event_text(text, now)


def parse_event(
    text: str,
    config: Config,
    now: datetime | None = None,
    use_ai: bool = False,
    fallback: bool | None = None,
) -> ParsedEvent:
    """Parse an event offline, or through the AI backend when use_ai is set."""
    if not use_ai:
        return parse_event_text(text, now)
    return asyncio.run(parse_event_with_ai(text, config, now=now, fallback=fallback))
