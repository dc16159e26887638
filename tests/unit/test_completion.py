# ABOUTME: Unit tests for the OpenAI completion client.
# ABOUTME: Uses a MagicMock SDK client to test request shape, lazy key checks, and error mapping.

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from bookinfo.llm.completion import CompletionError, OpenAICompletion, StructuredCompletion


def _response(content: str | None) -> SimpleNamespace:
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _fake_client(content: str | None = "ok") -> MagicMock:
    client = MagicMock()
    client.chat.completions.create.return_value = _response(content)
    return client


class TestStructuredCompletionProtocol:
    """Tests for StructuredCompletion protocol compliance."""

    def test_openai_completion_satisfies_protocol(self) -> None:
        """OpenAICompletion satisfies the StructuredCompletion protocol."""
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini")
        assert isinstance(completion, StructuredCompletion)


class TestOpenAICompletion:
    """Tests for OpenAICompletion."""

    def test_returns_first_choice_content(self) -> None:
        """The text of the first choice is returned unchanged."""
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=_fake_client("42"))
        assert completion.complete("system", "user") == "42"

    def test_request_carries_prompts_model_and_limits(self) -> None:
        """System and user prompts, model, token ceiling and temperature are sent."""
        client = _fake_client()
        completion = OpenAICompletion(
            "sk-test", model="gpt-4o-mini", max_tokens=16000, client=client
        )
        completion.complete("be helpful", "find the ISBN", temperature=0.0)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"] == [
            {"role": "system", "content": "be helpful"},
            {"role": "user", "content": "find the ISBN"},
        ]
        assert kwargs["max_tokens"] == 16000
        assert kwargs["temperature"] == 0.0

    def test_model_override(self) -> None:
        """A per-call model replaces the default model."""
        client = _fake_client()
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=client)
        completion.complete("s", "u", temperature=0.7, model="gpt-4o")

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.7

    def test_missing_api_key_fails_at_call_time(self) -> None:
        """Construction succeeds without a key; the first call raises CompletionError."""
        completion = OpenAICompletion(None, model="gpt-4o-mini")
        with pytest.raises(CompletionError, match="OPENAI_API_KEY"):
            completion.complete("s", "u")

    def test_sdk_error_raises_completion_error(self) -> None:
        """SDK connection errors become CompletionError."""
        client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=client)

        with pytest.raises(CompletionError):
            completion.complete("s", "u")

    def test_status_error_includes_status_code(self) -> None:
        """HTTP errors from the API report their status code."""
        client = MagicMock()
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        response = httpx.Response(401, request=request, json={"error": {"message": "bad key"}})
        client.chat.completions.create.side_effect = openai.AuthenticationError(
            "bad key", response=response, body=None
        )
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=client)

        with pytest.raises(CompletionError, match="401"):
            completion.complete("s", "u")

    def test_empty_content_raises(self) -> None:
        """A choice with no content raises CompletionError."""
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=_fake_client(None))
        with pytest.raises(CompletionError, match="Empty"):
            completion.complete("s", "u")

    def test_no_choices_raises(self) -> None:
        """A response without choices raises CompletionError."""
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        completion = OpenAICompletion("sk-test", model="gpt-4o-mini", client=client)
        with pytest.raises(CompletionError):
            completion.complete("s", "u")
