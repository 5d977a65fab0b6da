"""Claude CLI adapter - subprocess wrapper for the claude binary."""

import asyncio
import logging
import subprocess
from pathlib import Path

from ..ports.llm_service import Completion

logger = logging.getLogger(__name__)


class ClaudeCLIService:
    """
    Claude CLI subprocess adapter.

    Implements CompletionService protocol. The system prompt and the user
    text are sent as one prompt via `claude -p`.
    """

    def __init__(
        self,
        cwd: Path | str | None = None,
        timeout: int = 60,
        binary: str = "claude",
    ):
        self.cwd = Path(cwd) if cwd else None
        self.timeout = timeout
        self.binary = binary

    @staticmethod
    def build_prompt(system_prompt: str, user_text: str) -> str:
        return f"{system_prompt}\n\nText: {user_text}"

    def complete_sync(self, system_prompt: str, user_text: str) -> Completion:
        """Blocking completion request."""
        try:
            proc = subprocess.run(
                [self.binary, "-p", self.build_prompt(system_prompt, user_text)],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return Completion.failure(
                "Claude CLI not found. Install with: npm install -g @anthropic-ai/claude-code"
            )
        except subprocess.TimeoutExpired:
            return Completion.failure(f"Claude CLI timed out after {self.timeout}s")

        if proc.returncode != 0:
            logger.error(f"Claude CLI failed: {proc.stderr}")
            return Completion.failure(f"Claude CLI failed: {proc.stderr}")
        return Completion.success(proc.stdout)

    async def complete(self, system_prompt: str, user_text: str) -> Completion:
        """Send a system prompt and user text. Returns the completion outcome."""
        return await asyncio.to_thread(self.complete_sync, system_prompt, user_text)
