from __future__ import annotations

from typing import Any

import anthropic
import openai

from .llm_adapters import get_adapter
from ..core.domain.exceptions import OracleResponseInvalidError
from ..core.domain.schema import REPORT_SCHEMA_NAME
from ..core.ports import LoggerPort


class Oracle:
    """Remote analysis oracle backed by a structured-generation LLM."""

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        api_key: str,
        logger: LoggerPort,
        timeout: float = 120.0,
        max_output_tokens: int = 8192,
    ) -> None:
        self._provider = provider
        self._model = model
        self._api_key = api_key
        self._logger = logger
        self._timeout = timeout
        self._max_output_tokens = max_output_tokens

    def generate(self, *, prompt: str, schema: dict[str, Any]) -> str:
        # Log LLM input with provider/model info
        self._logger.info(
            "llm_input",
            type="llm_input",
            provider=self._provider,
            model=self._model,
            prompt_len=len(prompt),
            prompt=prompt,
        )

        adapter = get_adapter(
            self._provider,
            self._model,
            self._api_key,
            timeout=self._timeout,
            max_retries=0,
        )
        try:
            resp = adapter.generate(
                prompt,
                schema,
                schema_name=REPORT_SCHEMA_NAME,
                max_output_tokens=self._max_output_tokens,
            )
        except (openai.APIError, anthropic.APIError) as e:
            self._logger.error(
                "llm_error",
                type="llm_error",
                provider=self._provider,
                model=self._model,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise OracleResponseInvalidError(f"No response from analysis service: {e}") from e
        text = resp.text

        # Log token usage
        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                type="llm_usage",
                provider=self._provider,
                model=self._model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        # Log LLM output
        self._logger.info(
            "llm_output",
            type="llm_output",
            provider=self._provider,
            model=self._model,
            raw_text_len=len(text),
            raw_text=text,
        )

        return text
