from __future__ import annotations

import time
from typing import Callable

from pydantic import ValidationError

from ..domain.exceptions import EmptyInputError, OracleResponseMalformedError
from ..domain.models import AnalysisReport, AnalysisRequest
from ..domain.prompt import build_prompt
from ..domain.schema import REPORT_SCHEMA, OracleReport
from ..ports import LoggerPort, OraclePort
from .json_extractor import JsonExtractor
from .report_normalizer import ReportNormalizer


class AnalysisOracleClient:
    """Sends one corpus to the analysis oracle and returns a validated report.

    The oracle is called exactly once per ``analyze``. Nothing is cached
    between calls.
    """

    def __init__(
        self,
        *,
        oracle: OraclePort,
        normalizer: ReportNormalizer,
        json_extractor: JsonExtractor,
        logger: LoggerPort,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._oracle = oracle
        self._normalizer = normalizer
        self._json_extractor = json_extractor
        self._logger = logger
        self._clock = clock

    def analyze(self, request: AnalysisRequest) -> AnalysisReport:
        """Analyze a corpus.

        Args:
            request: Corpus, language hint and provenance

        Returns:
            Normalized AnalysisReport with measured scan duration

        Raises:
            EmptyInputError: If the corpus is blank (no network call is made)
            OracleResponseInvalidError: If the response is empty or not a JSON object
            OracleResponseMalformedError: If the JSON object does not match the schema
        """
        if not request.corpus.strip():
            raise EmptyInputError()

        started = self._clock()
        prompt = build_prompt(corpus=request.corpus, language_hint=request.language_hint)
        raw_text = self._oracle.generate(prompt=prompt, schema=REPORT_SCHEMA)
        duration_ms = int(round((self._clock() - started) * 1000))

        data = self._json_extractor.extract(raw_text)
        try:
            parsed = OracleReport.model_validate(data)
        except ValidationError as e:
            errors = [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]
            self._logger.error(
                "oracle_response_malformed",
                type="oracle_response_malformed",
                errors=errors,
            )
            raise OracleResponseMalformedError(
                f"Analysis service response does not match the report schema ({len(errors)} errors)",
                errors=errors,
            ) from e

        return self._normalizer.normalize(
            parsed,
            scan_duration_ms=duration_ms,
            provenance=request.provenance,
        )
