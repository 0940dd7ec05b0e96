"""Claude API wrapper with async support and retry logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from career_readiness.errors import ExternalServiceError, ParseError
from career_readiness.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client with exponential-backoff retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        model: str = DEFAULT_MODEL,
        max_retries: int = 3,
    ):
        client_kwargs: dict = {}
        if api_key is not None:
            client_kwargs["api_key"] = api_key
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**client_kwargs)
        self.model = model
        self.max_retries = max(1, max_retries)
        # (model, input_tokens, output_tokens) per successful call
        self._token_log: list[tuple[str, int, int]] = []

    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        request: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(min=1, max=10),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**request)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage.

        Raises:
            ExternalServiceError: on auth or transport failure after retries,
                or when the response carries no text block.
        """
        model = model or self.model
        logger.debug("LLM call: model=%s", model)
        try:
            message = await self._call_api(
                prompt=prompt,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as exc:
            logger.error("LLM call failed", exc_info=True)
            raise ExternalServiceError("anthropic", str(exc)) from exc
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = next(
            (block.text for block in message.content or [] if isinstance(getattr(block, "text", None), str)),
            None,
        )
        if text is None:
            logger.error("LLM response had no text block (stop_reason=%s)", getattr(message, "stop_reason", None))
            raise ExternalServiceError("anthropic", "Response contained no text content")
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 4096,
    ) -> dict | list:
        """Send a prompt and parse JSON from the response.

        Raises:
            ExternalServiceError: on transport failure.
            ParseError: if the response holds no parseable JSON.
        """
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return extract_json(response.text)

    async def complete_json(
        self, system: str, prompt: str, model: str | None = None
    ) -> dict | None:
        """Completion returning a JSON object, or None on any failure."""
        try:
            data = await self.generate_json(prompt=prompt, system=system, model=model)
        except (ExternalServiceError, ParseError) as exc:
            logger.warning("Completion unavailable: %s", exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Completion returned %s, expected an object", type(data).__name__)
            return None
        return data

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
