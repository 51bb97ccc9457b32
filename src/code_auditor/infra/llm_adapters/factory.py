from __future__ import annotations

from .anthropic_adapter import AnthropicStructuredAdapter
from .interface import StructuredLLMAdapter
from .openai_adapter import OpenAIStructuredAdapter
from .types import PROVIDERS


def get_adapter(
    provider: str,
    model: str,
    api_key: str,
    *,
    timeout: float = 120.0,
    max_retries: int = 0,
) -> StructuredLLMAdapter:
    """Return the structured-output adapter for ``provider``.

    Raises:
        ValueError: If the provider is not one of PROVIDERS
    """
    name = provider.strip().lower()
    if name == "openai":
        return OpenAIStructuredAdapter(model, api_key, timeout=timeout, max_retries=max_retries)
    if name == "anthropic":
        return AnthropicStructuredAdapter(model, api_key, timeout=timeout, max_retries=max_retries)
    raise ValueError(f"provider must be one of {', '.join(PROVIDERS)} (got {provider!r})")
