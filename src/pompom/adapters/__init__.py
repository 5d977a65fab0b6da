"""Adapters - I/O implementations of ports."""

from .groq_proxy import GroqProxyService
from .claude_cli import ClaudeCLIService

__all__ = [
    "GroqProxyService",
    "ClaudeCLIService",
]
