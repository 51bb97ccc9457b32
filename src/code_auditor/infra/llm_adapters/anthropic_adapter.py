from __future__ import annotations

import json
from typing import Any

import anthropic

from .types import LLMResponse, TokenUsage


class AnthropicStructuredAdapter:
    """Anthropic Messages API adapter (Claude Sonnet, etc.).

    - Declares one tool whose input_schema is the requested schema
    - Forces it via tool_choice, so the tool input is the structured output
    """

    def __init__(self, model: str, api_key: str, *, timeout: float = 120.0, max_retries: int = 0) -> None:
        self.model = model
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=max_retries)

    def generate(
        self,
        prompt: str,
        schema: dict[str, Any],
        *,
        schema_name: str = "response",
        max_output_tokens: int = 8192,
    ) -> LLMResponse:
        message = self._client.messages.create(
            model=self.model,
            max_tokens=max_output_tokens,
            messages=[{"role": "user", "content": prompt}],
            tools=[
                {
                    "name": schema_name,
                    "description": "Record the structured result of the analysis.",
                    "input_schema": schema,
                }
            ],
            tool_choice={"type": "tool", "name": schema_name},
        )
        # the forced tool call carries the structured payload
        text = ""
        for block in message.content:
            if getattr(block, "type", None) == "tool_use" and block.name == schema_name:
                text = json.dumps(block.input, ensure_ascii=False)
                break

        u = message.usage
        usage = TokenUsage.from_counts(u.input_tokens, u.output_tokens) if u is not None else None
        return LLMResponse(text=text, usage=usage)
