"""Tests for the shared workflow layer."""

from datetime import datetime
from unittest.mock import patch

import pytest

from pompom.adapters.claude_cli import ClaudeCLIService
from pompom.adapters.groq_proxy import GroqProxyService
from pompom.ai_parser import AIParseError
from pompom.config import Config
from pompom.ports.llm_service import Completion
from pompom.workflows import get_completion_service, parse_event, parse_event_with_ai


@pytest.fixture
def now():
    return datetime(2025, 8, 19, 12, 0)


class FakeService:
    def __init__(self, result: Completion):
        self.result = result
        self.calls = 0

    async def complete(self, system_prompt: str, user_text: str) -> Completion:
        self.calls += 1
        return self.result


class TestGetCompletionService:
    def test_groq(self):
        config = Config(ai_proxy_url="http://proxy", ai_model="m", ai_api_key="k", ai_timeout=7)
        service = get_completion_service(config)
        assert isinstance(service, GroqProxyService)
        assert service.url == "http://proxy"
        assert service.model == "m"
        assert service.api_key == "k"
        assert service.timeout == 7

    def test_claude(self):
        service = get_completion_service(Config(ai_backend="claude", ai_timeout=12))
        assert isinstance(service, ClaudeCLIService)
        assert service.timeout == 12

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown AI backend"):
            get_completion_service(Config(ai_backend="carrier-pigeon"))


class TestParseEventWithAI:
    @pytest.mark.asyncio
    async def test_ai_result(self, now):
        service = FakeService(Completion.success('{"summary": "Planning", "startLocal": "2025-08-20T10:00"}'))
        ev = await parse_event_with_ai("Sprint Planning tomorrow 10am", Config(), now=now, service=service)
        assert ev.summary == "Planning"
        assert ev.end_local == "2025-08-20T11:00"
        assert service.calls == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_local(self, now):
        service = FakeService(Completion.failure("AI service error 500"))
        ev = await parse_event_with_ai("Team Sync tomorrow 9am", Config(), now=now, service=service)
        assert ev.summary == "Team Sync"
        assert ev.start_local == "2025-08-20T09:00"

    @pytest.mark.asyncio
    async def test_fallback_disabled_in_config(self, now):
        service = FakeService(Completion.failure("AI service error 500"))
        with pytest.raises(AIParseError):
            await parse_event_with_ai(
                "Team Sync tomorrow 9am", Config(ai_fallback_local=False), now=now, service=service
            )

    @pytest.mark.asyncio
    async def test_fallback_override(self, now):
        service = FakeService(Completion.success("no json here"))
        with pytest.raises(AIParseError):
            await parse_event_with_ai("Team Sync tomorrow 9am", Config(), now=now, fallback=False, service=service)


class TestParseEvent:
    def test_offline_by_default(self, now):
        with patch("pompom.workflows.get_completion_service") as mock_get:
            ev = parse_event("Code Review Fri 16:30", Config(), now=now)
        mock_get.assert_not_called()
        assert ev.start_local == "2025-08-22T16:30"

    def test_ai_path(self, now):
        service = FakeService(Completion.success('{"summary": "Review"}'))
        with patch("pompom.workflows.get_completion_service", return_value=service):
            ev = parse_event("Code Review Fri 16:30", Config(), now=now, use_ai=True)
        assert ev.summary == "Review"
        assert ev.start_local == "2025-08-22T16:30"
