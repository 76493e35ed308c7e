"""Claude completion client used by the insight pipeline."""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import anthropic
from anthropic import AsyncAnthropic

from app.core.config import settings
from app.core.logging_utils import estimate_llm_cost, log_llm_cost

logger = logging.getLogger("Insights.LLM")


class AIClientError(Exception):
    """A classified failure of the completion call."""

    kind = "unknown"


class AIUnauthorizedError(AIClientError):
    kind = "unauthorized"


class AIRateLimitedError(AIClientError):
    kind = "rate_limited"


class AIUnknownError(AIClientError):
    kind = "unknown"


def classify_error(exc: Exception) -> AIClientError:
    """Map an SDK exception onto the client's error classes."""
    if isinstance(exc, anthropic.PermissionDeniedError):
        return AIUnauthorizedError(
            "Anthropic API key is invalid, expired, or does not have access to the model. "
            "Please check your ANTHROPIC_API_KEY."
        )
    if isinstance(exc, anthropic.AuthenticationError):
        return AIUnauthorizedError(
            "Anthropic API key is missing or invalid. Please set ANTHROPIC_API_KEY in your environment."
        )
    if isinstance(exc, anthropic.RateLimitError):
        return AIRateLimitedError("Anthropic API rate limit exceeded. Please try again later.")
    return AIUnknownError(str(exc) or "Failed to call AI service")


class ClaudeCompletionClient:
    """Send a single-prompt completion to Claude and return the text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        models: Optional[List[str]] = None,
        max_tokens: Optional[int] = None,
        client: Optional[AsyncAnthropic] = None,
    ) -> None:
        self.client = client or AsyncAnthropic(
            api_key=api_key or settings.ANTHROPIC_API_KEY,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_retries=settings.LLM_MAX_RETRIES,
        )
        self.model_candidates = list(models or settings.CLAUDE_MODEL_OPTIONS)
        self.max_tokens = max_tokens or settings.INSIGHT_MAX_TOKENS

        logger.info(
            "Claude completion client initialized with models: %s",
            ", ".join(self.model_candidates),
        )

    async def complete(self, prompt: str) -> str:
        """
        Return the model's text reply to `prompt`.

        Falls through to the next configured model only when a model is
        unavailable (404). Authentication and rate-limit failures are raised
        immediately since another model would hit the same limit.

        Raises:
            AIUnauthorizedError, AIRateLimitedError, AIUnknownError
        """
        last_error: Optional[Exception] = None

        for model_name in self.model_candidates:
            try:
                return await self._invoke_model(prompt, model_name)
            except anthropic.NotFoundError as exc:
                logger.warning("Model %s unavailable, trying next candidate: %s", model_name, exc)
                last_error = exc
            except AIClientError:
                raise
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("Error calling AI with model %s: %s", model_name, exc)
                raise classify_error(exc) from exc

        raise AIUnknownError(f"No configured model is available: {last_error}") from last_error

    async def _invoke_model(self, prompt: str, model_name: str) -> str:
        started = time.monotonic()
        response = await self.client.messages.create(
            model=model_name,
            max_tokens=self.max_tokens,
            temperature=0,
            messages=[{"role": "user", "content": prompt}],
        )
        duration_ms = int((time.monotonic() - started) * 1000)

        usage = getattr(response, "usage", None)
        if usage is not None:
            log_llm_cost(
                model=model_name,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                cost_usd=estimate_llm_cost(model_name, usage.input_tokens, usage.output_tokens),
                duration_ms=duration_ms,
                endpoint="weekly_insight",
            )

        text = "".join(
            block.text for block in (response.content or []) if getattr(block, "text", None)
        ).strip()
        if not text:
            raise AIUnknownError(f"Model {model_name} returned empty content")

        logger.info("Received AI response from %s in %sms", model_name, duration_ms)
        return text
