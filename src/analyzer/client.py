"""
Claude API Client

Async wrapper around the Anthropic Messages API used to write report
recommendations. API failures come back as unsuccessful responses so the
report can fall back to its standard recommendations.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import anthropic

logger = logging.getLogger(__name__)


# Sonnet pricing, USD per million tokens
INPUT_COST_PER_MTOK = 3.0
OUTPUT_COST_PER_MTOK = 15.0


@dataclass
class TokenUsage:
    """Running token counts."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def estimated_cost(self) -> float:
        return (
            self.input_tokens * INPUT_COST_PER_MTOK
            + self.output_tokens * OUTPUT_COST_PER_MTOK
        ) / 1_000_000

    def add(self, other: "TokenUsage"):
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens


@dataclass
class AnalysisResponse:
    """Text returned by one Claude call, or the reason it failed."""
    content: str
    usage: TokenUsage
    model: str
    stop_reason: str
    success: bool = True
    error: Optional[str] = None

    @classmethod
    def failure(cls, model: str, error: str) -> "AnalysisResponse":
        return cls(
            content="",
            usage=TokenUsage(),
            model=model,
            stop_reason="error",
            success=False,
            error=error,
        )


class ClaudeClient:
    """Claude client with per-instance usage tracking."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 1024
    TEMPERATURE = 0.3

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        async_client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        """
        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY)
            model: Model name (defaults to DEFAULT_MODEL)
            async_client: Preconfigured AsyncAnthropic, skips key lookup
        """
        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key and async_client is None:
            raise ValueError("ANTHROPIC_API_KEY not provided")

        self.model = model or self.DEFAULT_MODEL
        self.async_client = async_client or anthropic.AsyncAnthropic(api_key=api_key)
        self.total_usage = TokenUsage()
        self.call_count = 0

    async def analyze(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> AnalysisResponse:
        """Send a single-turn prompt and return the text reply."""
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            message = await self.async_client.messages.create(**request)
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            return AnalysisResponse.failure(self.model, str(e))

        usage = TokenUsage(
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
        self.total_usage.add(usage)
        self.call_count += 1

        logger.info(
            f"Claude call: {usage.input_tokens} in, {usage.output_tokens} out, "
            f"${usage.estimated_cost:.4f}"
        )

        return AnalysisResponse(
            content="".join(getattr(block, "text", "") for block in message.content),
            usage=usage,
            model=self.model,
            stop_reason=message.stop_reason,
        )

    def get_usage_summary(self) -> Dict[str, Any]:
        return {
            "total_calls": self.call_count,
            "input_tokens": self.total_usage.input_tokens,
            "output_tokens": self.total_usage.output_tokens,
            "total_tokens": self.total_usage.total_tokens,
            "estimated_cost": self.total_usage.estimated_cost,
        }
