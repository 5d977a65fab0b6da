"""Groq chat-completions adapter - talks to the app's /api/groq proxy."""

import asyncio
import logging

import requests

from ..config import DEFAULT_MODEL, DEFAULT_PROXY_URL
from ..ports.llm_service import Completion

logger = logging.getLogger(__name__)


class GroqProxyService:
    """
    HTTP adapter for an OpenAI-compatible chat-completions endpoint.

    Implements CompletionService protocol. Point it at the app's proxy,
    or at Groq directly together with an API key.
    """

    def __init__(
        self,
        url: str = DEFAULT_PROXY_URL,
        model: str = DEFAULT_MODEL,
        api_key: str = "",
        temperature: float = 0.1,
        max_tokens: int = 300,
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._session = session or requests.Session()

    def _body(self, system_prompt: str, user_text: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        if resp.status_code == 429:
            return "Rate limit exceeded. Please try again later."
        try:
            error = resp.json().get("error")
        except (ValueError, AttributeError):
            error = None
        if isinstance(error, dict):
            error = error.get("message")
        return error or f"AI service error {resp.status_code}"

    def complete_sync(self, system_prompt: str, user_text: str) -> Completion:
        """Blocking completion request."""
        try:
            resp = self._session.post(
                self.url,
                json=self._body(system_prompt, user_text),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"AI request failed: {e}")
            return Completion.failure(f"AI service unreachable: {e}")

        if not resp.ok:
            message = self._error_message(resp)
            logger.error(f"AI request failed ({resp.status_code}): {message}")
            return Completion.failure(message)

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError):
            logger.error("AI response missing choices[0].message.content")
            return Completion.failure("AI response had no completion")
        return Completion.success(content)

    async def complete(self, system_prompt: str, user_text: str) -> Completion:
        """Send a system prompt and user text. Returns the completion outcome."""
        return await asyncio.to_thread(self.complete_sync, system_prompt, user_text)
