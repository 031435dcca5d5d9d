"""Tests for NamingAssistant labels and the date fallback."""

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from cloudspace.services.naming import EXCERPT_CHARS, NamingAssistant, fallback_name


def today_label() -> str:
    return f"Text {datetime.now(timezone.utc).date().isoformat()}"


def make_client(create) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = create
    return client


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestFallbackName:
    def test_uses_iso_date(self):
        now = datetime(2024, 3, 9, 23, 59, tzinfo=timezone.utc)
        assert fallback_name(now) == "Text 2024-03-09"


class TestNamingAssistant:
    async def test_without_api_key_falls_back(self, settings):
        assistant = NamingAssistant(settings)

        assert assistant.client is None
        assert await assistant.name_for("anything") == today_label()

    async def test_returns_trimmed_label(self, settings):
        create = AsyncMock(return_value=completion("  Quarterly Budget Notes \n"))
        assistant = NamingAssistant(settings, client=make_client(create))

        assert await assistant.name_for("budget for Q3 ...") == "Quarterly Budget Notes"

    async def test_sends_only_excerpt(self, settings):
        create = AsyncMock(return_value=completion("Long Text"))
        assistant = NamingAssistant(settings, client=make_client(create))

        await assistant.name_for("a" * 2000)

        messages = create.call_args.kwargs["messages"]
        user_prompt = messages[-1]["content"]
        assert "a" * EXCERPT_CHARS in user_prompt
        assert "a" * (EXCERPT_CHARS + 1) not in user_prompt
        assert create.call_args.kwargs["model"] == settings.NAMING_MODEL

    async def test_api_error_falls_back(self, settings):
        create = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        assistant = NamingAssistant(settings, client=make_client(create))

        assert await assistant.name_for("some text") == today_label()

    async def test_timeout_falls_back(self, settings):
        async def slow_create(**kwargs):
            await asyncio.sleep(5)
            return completion("Too Late")

        assistant = NamingAssistant(settings, client=make_client(slow_create))

        assert await assistant.name_for("some text") == today_label()

    async def test_empty_response_falls_back(self, settings):
        create = AsyncMock(return_value=completion("   "))
        assistant = NamingAssistant(settings, client=make_client(create))

        assert await assistant.name_for("some text") == today_label()

    async def test_no_choices_falls_back(self, settings):
        create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        assistant = NamingAssistant(settings, client=make_client(create))

        assert await assistant.name_for("some text") == today_label()
