from __future__ import annotations

import copy
from typing import Any

from openai import OpenAI

from .types import LLMResponse, TokenUsage


def to_strict_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert a JSON schema to the form OpenAI strict mode accepts.

    Strict mode wants every property listed in ``required`` and no
    additional properties. Properties that were optional become nullable.
    """
    strict = copy.deepcopy(schema)
    _make_strict(strict)
    return strict


def _make_strict(node: dict[str, Any]) -> None:
    if node.get("type") == "object" and "properties" in node:
        required = set(node.get("required", []))
        for name, prop in node["properties"].items():
            _make_strict(prop)
            if name not in required:
                prop["type"] = [prop["type"], "null"]
                if "enum" in prop:
                    prop["enum"] = [*prop["enum"], None]
        node["required"] = list(node["properties"])
        node["additionalProperties"] = False
    elif node.get("type") == "array" and isinstance(node.get("items"), dict):
        _make_strict(node["items"])


class OpenAIStructuredAdapter:
    """OpenAI Responses API adapter (gpt-5, gpt-4o, etc.).

    - Uses text.format={"type": "json_schema", "strict": True, ...}
    - SDK retries are disabled unless max_retries is given
    """

    def __init__(self, model: str, api_key: str, *, timeout: float = 120.0, max_retries: int = 0) -> None:
        self.model = model
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)

    def generate(
        self,
        prompt: str,
        schema: dict[str, Any],
        *,
        schema_name: str = "response",
        max_output_tokens: int = 8192,
    ) -> LLMResponse:
        response = self._client.responses.create(
            model=self.model,
            input=prompt,
            max_output_tokens=max_output_tokens,
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": to_strict_schema(schema),
                    "strict": True,
                }
            },
        )
        u = response.usage
        usage = TokenUsage.from_counts(u.input_tokens, u.output_tokens, u.total_tokens) if u is not None else None
        return LLMResponse(text=response.output_text or "", usage=usage)
