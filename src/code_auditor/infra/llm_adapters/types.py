from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Provider = Literal["openai", "anthropic"]
PROVIDERS: tuple[str, ...] = ("openai", "anthropic")


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None

    @classmethod
    def from_counts(
        cls, input_tokens: int | None, output_tokens: int | None, total_tokens: int | None = None
    ) -> "TokenUsage":
        """Build usage from SDK counters; the total is summed when the SDK omits it."""
        if total_tokens is None and (input_tokens is not None or output_tokens is not None):
            total_tokens = (input_tokens or 0) + (output_tokens or 0)
        return cls(input_tokens=input_tokens, output_tokens=output_tokens, total_tokens=total_tokens)


@dataclass(frozen=True)
class LLMResponse:
    """Structured output as JSON text, plus token usage when the SDK reports it."""
    text: str
    usage: TokenUsage | None = None
