"""Async LLM client routing backend ids to Gemini or Claude."""

from __future__ import annotations

import logging

import anthropic
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from resume_refiner.errors import BackendError

logger = logging.getLogger(__name__)

ANTHROPIC_PREFIX = "claude"


def provider_for(backend_id: str) -> str:
    """Return ``"anthropic"`` for Claude model ids, ``"gemini"`` otherwise."""
    return "anthropic" if backend_id.startswith(ANTHROPIC_PREFIX) else "gemini"


class LLMClient:
    """Single-shot text completion against one backend per call.

    SDK clients are created on first use so a chain made only of Gemini
    models does not need an Anthropic key, and vice versa. SDK errors are
    translated into :class:`BackendError` carrying the HTTP status.
    """

    def __init__(
        self,
        gemini_api_key: str | None = None,
        anthropic_api_key: str | None = None,
        timeout: float | None = None,
        temperature: float = 0.3,
        max_tokens: int = 8192,
    ):
        self.gemini_api_key = gemini_api_key
        self.anthropic_api_key = anthropic_api_key
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._gemini: genai.Client | None = None
        self._anthropic: anthropic.AsyncAnthropic | None = None
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @property
    def gemini_client(self) -> genai.Client:
        if self._gemini is None:
            kwargs: dict = {}
            if self.gemini_api_key is not None:
                kwargs["api_key"] = self.gemini_api_key
            if self.timeout is not None:
                # HttpOptions takes milliseconds
                kwargs["http_options"] = genai_types.HttpOptions(timeout=int(self.timeout * 1000))
            self._gemini = genai.Client(**kwargs)
        return self._gemini

    @property
    def anthropic_client(self) -> anthropic.AsyncAnthropic:
        if self._anthropic is None:
            kwargs: dict = {}
            if self.anthropic_api_key is not None:
                kwargs["api_key"] = self.anthropic_api_key
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._anthropic = anthropic.AsyncAnthropic(**kwargs)
        return self._anthropic

    async def invoke(self, backend_id: str, prompt: str) -> str:
        """Send ``prompt`` to ``backend_id`` and return the full completion text.

        Returns an empty string when the backend answered without text.

        Raises:
            BackendError: the backend answered with an error status or could
                not be reached (``status`` is None in that case).
        """
        logger.debug("LLM call: model=%s", backend_id)
        if provider_for(backend_id) == "anthropic":
            return await self._invoke_anthropic(backend_id, prompt)
        return await self._invoke_gemini(backend_id, prompt)

    async def _invoke_gemini(self, model: str, prompt: str) -> str:
        try:
            response = await self.gemini_client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_tokens,
                ),
            )
        except genai_errors.APIError as exc:
            raise BackendError(f"Gemini API error: {exc}", status=exc.code) from exc

        usage = response.usage_metadata
        self._record_usage(
            model,
            (usage.prompt_token_count or 0) if usage else 0,
            (usage.candidates_token_count or 0) if usage else 0,
        )
        return response.text or ""

    async def _invoke_anthropic(self, model: str, prompt: str) -> str:
        try:
            message = await self.anthropic_client.messages.create(
                model=model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as exc:
            raise BackendError(f"Claude API error: {exc}", status=exc.status_code) from exc
        except anthropic.APIConnectionError as exc:
            raise BackendError(f"Claude API connection error: {exc}") from exc

        self._record_usage(model, message.usage.input_tokens, message.usage.output_tokens)
        return "".join(
            block.text for block in message.content if getattr(block, "type", "text") == "text"
        )

    def _record_usage(self, model: str, input_tokens: int, output_tokens: int) -> None:
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
