from .types import PROVIDERS, Provider, TokenUsage, LLMResponse
from .interface import StructuredLLMAdapter
from .openai_adapter import OpenAIStructuredAdapter, to_strict_schema
from .anthropic_adapter import AnthropicStructuredAdapter
from .factory import get_adapter

__all__ = [
    "PROVIDERS",
    "Provider",
    "TokenUsage",
    "LLMResponse",
    "StructuredLLMAdapter",
    "OpenAIStructuredAdapter",
    "AnthropicStructuredAdapter",
    "to_strict_schema",
    "get_adapter",
]
