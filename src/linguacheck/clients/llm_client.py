"""Async Claude client used by the grammar checker and the content suggester."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from linguacheck.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# Errors worth another attempt; bad requests and auth failures are not.
RETRYABLE_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.APITimeoutError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


@dataclass
class LLMResponse:
    """Text reply plus token usage."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Thin async wrapper over the Messages API with exponential-backoff retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        max_retries: int = 3,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self._token_log: list[tuple[str, int, int]] = []  # (model, input, output)

    async def _create_message(self, **kwargs) -> anthropic.types.Message:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(min=1, max=10),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send one user prompt and return the first text block of the reply."""
        model = model or self.model
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s, prompt=%d chars", model, len(prompt))
        message = await self._create_message(**kwargs)

        usage = message.usage
        self._token_log.append((model, usage.input_tokens, usage.output_tokens))
        logger.debug(
            "LLM response: %d input, %d output tokens", usage.input_tokens, usage.output_tokens
        )
        return LLMResponse(
            text=message.content[0].text,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> dict | list:
        """Like :meth:`generate`, but parse the reply as JSON (ValueError if it is not)."""
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return extract_json(response.text)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
