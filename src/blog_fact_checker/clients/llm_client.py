"""Claude API wrapper used for automated fact-check analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import retry, stop_after_attempt, wait_exponential

from blog_fact_checker.config import LLMConfig

logger = logging.getLogger(__name__)

DEFAULT_MODEL = LLMConfig.model
DEFAULT_MAX_TOKENS = LLMConfig.max_tokens


class EmptyReplyError(RuntimeError):
    """Claude returned no text to parse."""


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int
    truncated: bool = False


@dataclass
class CallUsage:
    model: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client with exponential-backoff retries.

    ``model`` and ``max_tokens`` are the defaults for every call; fact-check
    replies are long lists, so the token ceiling matters more than usual. A
    reply cut off at that ceiling is still returned but flagged ``truncated``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self.max_tokens = max_tokens
        self._usage: list[CallUsage] = []

    @classmethod
    def from_config(cls, config: LLMConfig, api_key: str | None = None) -> LLMClient:
        return cls(
            api_key=api_key,
            timeout=config.timeout,
            model=config.model,
            max_tokens=config.max_tokens,
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(min=1, max=10),
        reraise=True,
    )
    async def _call_api(self, prompt: str, system: str, model: str, max_tokens: int):
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": 0.0,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text reply with usage.

        Raises:
            EmptyReplyError: the reply carried no text.
        """
        model = model or self.model
        max_tokens = max_tokens or self.max_tokens
        logger.debug("LLM call: model=%s max_tokens=%d", model, max_tokens)
        try:
            message = await self._call_api(prompt, system, model, max_tokens)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        usage = CallUsage(model, message.usage.input_tokens, message.usage.output_tokens)
        self._usage.append(usage)
        logger.debug("LLM response: %d input, %d output tokens", usage.input_tokens, usage.output_tokens)

        if not message.content or not message.content[0].text.strip():
            raise EmptyReplyError("Claude returned an empty reply")
        truncated = message.stop_reason == "max_tokens"
        if truncated:
            logger.warning(
                "Reply stopped at the %d-token limit; later suggestions may be missing",
                max_tokens,
            )
        return LLMResponse(
            text=message.content[0].text,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            truncated=truncated,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset it."""
        summary = {
            "input": sum(u.input_tokens for u in self._usage),
            "output": sum(u.output_tokens for u in self._usage),
            "calls": len(self._usage),
        }
        self._usage.clear()
        return summary
