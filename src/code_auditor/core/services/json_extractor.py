from __future__ import annotations

import json
from typing import Any

from ..domain.exceptions import OracleResponseInvalidError


class JsonExtractor:
    """Domain service for extracting the JSON object from an oracle response.

    Structured-output providers normally return bare JSON, but some wrap it
    in a markdown fence or a sentence. The outermost braces are used.
    """

    def extract(self, text: str | None) -> dict[str, Any]:
        """Extract the JSON object from text.

        Args:
            text: Raw oracle response text

        Returns:
            Parsed JSON object

        Raises:
            OracleResponseInvalidError: If the text is empty, holds no JSON
                object, or the object does not parse
        """
        if text is None or not text.strip():
            raise OracleResponseInvalidError("No response from analysis service.")

        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1 or end <= start:
            raise OracleResponseInvalidError("Analysis service response contains no JSON object.")

        try:
            parsed = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            raise OracleResponseInvalidError(f"Analysis service returned invalid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise OracleResponseInvalidError("Analysis service response is not a JSON object.")
        return parsed
