"""
Logging helpers for model output and LLM usage.

Includes:
- Cleaning of raw model text before it is quoted in a log line
- Structured cost logging for AI API calls
"""
import json
import logging
import re
from typing import Dict, Optional, Tuple

_CONTROL_CHARS = re.compile(r'[\x00-\x1F\x7F]')


def sanitize_for_logging(text: Optional[str], max_len: int = 100) -> str:
    """
    Make untrusted text safe to quote inside a single log line.

    Control characters (including newlines) are dropped and the result is
    cut at `max_len` characters with a trailing "...".
    """
    if text is None:
        return "None"

    cleaned = _CONTROL_CHARS.sub('', str(text))
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "..."
    return cleaned


# =============================================================================
# STRUCTURED COST LOGGING
# =============================================================================

_cost_logger = logging.getLogger("Insights.Cost")

# USD per million tokens (input, output), matched by model-name prefix
MODEL_PRICING: Dict[str, Tuple[float, float]] = {
    "claude-sonnet-4": (3.0, 15.0),
    "claude-3-5-sonnet": (3.0, 15.0),
    "claude-haiku-4": (1.0, 5.0),
    "claude-3-5-haiku": (0.8, 4.0),
    "claude-opus-4": (15.0, 75.0),
}


def estimate_llm_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of a call; unknown models cost 0."""
    for prefix, (input_price, output_price) in MODEL_PRICING.items():
        if model.startswith(prefix):
            return (input_tokens * input_price + output_tokens * output_price) / 1_000_000
    return 0.0


def log_llm_cost(
    model: str,
    input_tokens: int,
    output_tokens: int,
    cost_usd: float,
    duration_ms: Optional[int] = None,
    endpoint: str = "unknown",
) -> None:
    """
    Emit one `LLM_COST {...}` line per completion call.

    The JSON payload carries model, token counts, estimated cost and the
    pipeline step (`endpoint`) so cost can be aggregated per feature.
    """
    event = {
        "event": "llm_cost",
        "model": model,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": input_tokens + output_tokens,
        "cost_usd": round(cost_usd, 6),
        "endpoint": endpoint,
    }

    if duration_ms is not None:
        event["duration_ms"] = duration_ms

    _cost_logger.info("LLM_COST %s", json.dumps(event))
