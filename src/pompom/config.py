"""Configuration management for PomPom."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

POMPOM_HOME = Path(os.environ.get("POMPOM_HOME", Path.home() / ".pompom"))
CONFIG_FILE = POMPOM_HOME / "config" / "pompom.conf"

DEFAULT_PROXY_URL = "http://localhost:3000/api/groq"
DEFAULT_MODEL = "llama-3.1-8b-instant"


@dataclass
class Config:
    """PomPom configuration."""

    ai_backend: str = "groq"
    ai_proxy_url: str = DEFAULT_PROXY_URL
    ai_api_key: str = ""
    ai_model: str = DEFAULT_MODEL
    ai_temperature: float = 0.1
    ai_max_tokens: int = 300
    ai_timeout: int = 30
    ai_fallback_local: bool = True


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(path: Path | None = None) -> Config:
    """Load configuration from pompom.conf file."""
    config = Config(ai_api_key=os.environ.get("GROQ_API_KEY", ""))
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "ai_backend":
                config.ai_backend = value.lower()
            case "ai_proxy_url":
                config.ai_proxy_url = value
            case "ai_api_key":
                config.ai_api_key = value
            case "ai_model":
                config.ai_model = value
            case "ai_temperature":
                try:
                    config.ai_temperature = float(value)
                except ValueError:
                    logger.warning(f"Invalid AI_TEMPERATURE {value!r}, keeping {config.ai_temperature}")
            case "ai_max_tokens":
                try:
                    config.ai_max_tokens = int(value)
                except ValueError:
                    logger.warning(f"Invalid AI_MAX_TOKENS {value!r}, keeping {config.ai_max_tokens}")
            case "ai_timeout":
                try:
                    config.ai_timeout = int(value)
                except ValueError:
                    logger.warning(f"Invalid AI_TIMEOUT {value!r}, keeping {config.ai_timeout}")
            case "ai_fallback_local":
                config.ai_fallback_local = _parse_bool(value)

    return config
