# ABOUTME: Completion client abstraction for the language-model calls in the pipeline.
# ABOUTME: Defines the StructuredCompletion protocol and an OpenAI chat-completions implementation.

import logging
from typing import Any, Protocol, runtime_checkable

import openai

from bookinfo.errors import BookinfoError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 16000


class CompletionError(BookinfoError):
    """Raised when a language-model call fails or returns no content."""


@runtime_checkable
class StructuredCompletion(Protocol):
    """Protocol for a single system + user prompt completion returning text."""

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.0,
        model: str | None = None,
    ) -> str: ...


class OpenAICompletion:
    """StructuredCompletion backed by the OpenAI chat completions API.

    The SDK client is created on first use so that a missing API key is only
    reported when a call is actually made. Requests are sent once; the SDK's
    built-in retries are disabled.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Any = None,
    ) -> None:
        self._api_key = api_key
        self._default_model = model
        self._max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise CompletionError("OpenAI API key not set. Set OPENAI_API_KEY.")
            self._client = openai.OpenAI(api_key=self._api_key, max_retries=0)
        return self._client

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.0,
        model: str | None = None,
    ) -> str:
        """Send one chat completion and return the text of the first choice.

        Args:
            system_prompt: Instruction sent with the system role.
            user_prompt: Content sent with the user role.
            temperature: Sampling temperature (0 = deterministic).
            model: Overrides the default model for this call.

        Raises:
            CompletionError: On any API failure or an empty response.
        """
        model = model or self._default_model
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=self._max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as exc:
            logger.error("OpenAI API returned HTTP %d: %s", exc.status_code, exc.message)
            raise CompletionError(f"OpenAI API error {exc.status_code}: {exc.message}") from exc
        except openai.OpenAIError as exc:
            logger.error("OpenAI request failed: %s", exc)
            raise CompletionError(f"OpenAI request failed: {exc}") from exc

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice and choice.message else None
        if not content:
            raise CompletionError(f"Empty completion from {model}")
        return content
