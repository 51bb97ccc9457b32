from __future__ import annotations

from collections import Counter

from ..domain.models import AnalysisReport, Provenance, Vulnerability
from ..domain.schema import OracleReport, OracleVulnerability
from ..ports import LoggerPort


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class ReportNormalizer:
    """Domain service that reconciles validated oracle output into an AnalysisReport.

    Findings keep the oracle's order. Duplicate ids are passed through and
    only reported in the log.
    """

    def __init__(self, *, logger: LoggerPort) -> None:
        self._logger = logger

    def normalize(
        self,
        parsed: OracleReport,
        *,
        scan_duration_ms: int,
        provenance: Provenance,
    ) -> AnalysisReport:
        vulnerabilities = tuple(self._vulnerability(v) for v in parsed.vulnerabilities)

        counts = Counter(v.id for v in vulnerabilities)
        duplicates = sorted(vid for vid, n in counts.items() if n > 1)
        if duplicates:
            self._logger.warning(
                "duplicate_vulnerability_ids",
                type="duplicate_vulnerability_ids",
                ids=duplicates,
            )

        return AnalysisReport(
            overall_score=parsed.overall_score,
            risk_level=parsed.risk_level,
            summary=parsed.summary,
            language=parsed.language,
            scan_duration_ms=max(0, scan_duration_ms),
            vulnerabilities=vulnerabilities,
            provenance=provenance,
        )

    def _vulnerability(self, v: OracleVulnerability) -> Vulnerability:
        return Vulnerability(
            id=v.id,
            title=v.title,
            severity=v.severity,
            line=v.line,
            description=v.description,
            recommendation=v.recommendation,
            fixed_code=v.fixed_code,
            code_snippet=_optional(v.code_snippet),
            cwe=_optional(v.cwe),
        )
