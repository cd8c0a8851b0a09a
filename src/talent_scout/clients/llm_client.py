"""Claude API wrapper with schema-constrained JSON output."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, TypeVar

import anthropic
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from talent_scout.config import resolve_api_key
from talent_scout.errors import ServiceError
from talent_scout.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"

T = TypeVar("T")

# Only transport-level hiccups are worth another attempt.
_TRANSIENT_ERRORS = (anthropic.APIConnectionError, anthropic.RateLimitError)


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    The underlying SDK client is created on first use so a missing
    credential surfaces as ConfigurationError at call time rather than at
    startup. Retries are off unless ``max_retries`` is raised.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 0,
        max_tokens: int = 8192,
    ):
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self._client: anthropic.AsyncAnthropic | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        # The SDK's HTTP pool is bound to the loop it was created on.
        loop = asyncio.get_running_loop()
        if self._client is None or self._loop is not loop:
            self._loop = loop
            kwargs: dict = {"api_key": resolve_api_key(self.api_key), "max_retries": 0}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = anthropic.AsyncAnthropic(**kwargs)
        return self._client

    async def aclose(self) -> None:
        """Close the SDK client's HTTP pool. The next call opens a fresh one."""
        client, self._client, self._loop = self._client, None, None
        if client is not None:
            await client.close()

    async def _call_api(self, **kwargs) -> anthropic.types.Message:
        """Make the actual API call, retrying transient errors if configured."""
        client = self.client
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await client.messages.create(**kwargs)

    async def _create(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int | None,
        **extra,
    ) -> anthropic.types.Message:
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
            **extra,
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s", model)
        try:
            message = await self._call_api(**kwargs)
        except anthropic.APIError as exc:
            logger.error("LLM call failed", exc_info=True)
            raise ServiceError(f"Completion call failed: {exc}") from exc

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        return message

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        message = await self._create(prompt, system, model, temperature, max_tokens)
        text = _joined_text(message)
        if not text:
            raise ServiceError("No response from AI")
        return LLMResponse(
            text=text,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        schema: dict | None = None,
        schema_name: str = "record_result",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> dict | list:
        """Send a prompt and return the parsed JSON payload.

        With ``schema`` the response is constrained by forcing a single tool
        call whose input schema is ``schema``; the tool input is returned as
        is. Without it the text body is parsed with ``extract_json``.

        Raises:
            ConfigurationError: no API key is configured.
            ServiceError: the call failed or produced an empty body.
            ParseError: the body could not be read as JSON.
        """
        if schema is None:
            response = await self.generate(
                prompt=prompt,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
            return extract_json(response.text)

        message = await self._create(
            prompt,
            system,
            model,
            temperature,
            max_tokens,
            tools=[
                {
                    "name": schema_name,
                    "description": "Return the result in the required structure.",
                    "input_schema": schema,
                }
            ],
            tool_choice={"type": "tool", "name": schema_name},
        )
        for block in message.content or []:
            if getattr(block, "type", None) == "tool_use":
                if not block.input:
                    raise ServiceError("No response from AI")
                return block.input

        # The model answered in prose instead of calling the tool.
        text = _joined_text(message)
        if not text:
            raise ServiceError("No response from AI")
        return extract_json(text)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary


def run_closing(llm: LLMClient, coro: Awaitable[T]) -> T:
    """``asyncio.run(coro)``, closing the client opened on that loop before it ends.

    Every ``asyncio.run`` gets a new loop, and the SDK pool cannot outlive it.
    """

    async def _main() -> T:
        try:
            return await coro
        finally:
            await llm.aclose()

    return asyncio.run(_main())


def _joined_text(message: anthropic.types.Message) -> str:
    parts = [
        block.text
        for block in message.content or []
        if getattr(block, "type", None) == "text"
    ]
    return "".join(parts).strip()
