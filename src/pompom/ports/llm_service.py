"""Completion service interface."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Completion:
    """Outcome of a single completion request."""

    ok: bool
    text: str = ""
    error: str = ""

    @classmethod
    def success(cls, text: str) -> "Completion":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, error: str) -> "Completion":
        return cls(ok=False, error=error)


class CompletionService(Protocol):
    """Interface for an AI backend that completes one prompt."""

    async def complete(self, system_prompt: str, user_text: str) -> Completion:
        """Send a system prompt and user text. Returns the completion outcome."""
        ...
