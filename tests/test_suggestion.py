"""Tests for chore-name suggestions."""
from types import SimpleNamespace
from unittest.mock import MagicMock

import openai

from choreboard.services.suggestion import ChoreSuggester


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestChoreSuggester:
    def test_without_key_uses_fallback(self):
        suggester = ChoreSuggester(api_key=None)

        assert not suggester.enabled
        assert suggester.suggest() == "Feed the goldfish"

    def test_returns_cleaned_answer(self):
        client = MagicMock()
        client.chat.completions.create.return_value = completion('  "Water the plants"\n')
        suggester = ChoreSuggester(api_key=None, model="test-model", client=client)

        assert suggester.suggest() == "Water the plants"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.8
        assert kwargs["max_tokens"] == 20

    def test_empty_answer_uses_fallback(self):
        client = MagicMock()
        client.chat.completions.create.return_value = completion("   ")

        assert ChoreSuggester(api_key=None, client=client).suggest() == "Make your bed"

    def test_missing_content_uses_fallback(self):
        client = MagicMock()
        client.chat.completions.create.return_value = completion(None)

        assert ChoreSuggester(api_key=None, client=client).suggest() == "Make your bed"

    def test_api_error_uses_fallback(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.OpenAIError("quota exceeded")

        assert ChoreSuggester(api_key=None, client=client).suggest() == "Help set the table"

    def test_key_builds_client(self, monkeypatch):
        created = {}

        def fake_client(api_key):
            created["api_key"] = api_key
            return MagicMock()

        monkeypatch.setattr(openai, "OpenAI", fake_client)

        suggester = ChoreSuggester(api_key="sk-test")

        assert suggester.enabled
        assert created == {"api_key": "sk-test"}
