from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class StructuredLLMAdapter(Protocol):
    """Minimal interface for a single schema-constrained generation."""

    def generate(
        self,
        prompt: str,
        schema: dict[str, Any],
        *,
        schema_name: str = "response",
        max_output_tokens: int = 8192,
    ) -> LLMResponse:
        """Run one request whose output must match ``schema`` and return its JSON text + token usage."""
        raise NotImplementedError
