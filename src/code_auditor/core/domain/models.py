from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


Severity = Literal["Critical", "High", "Medium", "Low", "Info"]
RiskLevel = Literal["Safe", "Low", "Medium", "High", "Critical"]

SEVERITIES: tuple[str, ...] = ("Critical", "High", "Medium", "Low", "Info")
RISK_LEVELS: tuple[str, ...] = ("Safe", "Low", "Medium", "High", "Critical")


@dataclass(frozen=True)
class RepositoryReference:
    """Owner/name pair identifying one hosted repository."""
    owner: str
    name: str

    @property
    def slug(self) -> str:
        """Returns owner/name format."""
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        """Returns GitHub HTTPS URL."""
        return f"https://github.com/{self.slug}"


@dataclass(frozen=True)
class RepositorySummary:
    """Repository metadata snapshot, fetched once per scan."""
    full_name: str
    star_count: int
    fork_count: int
    updated_at: str
    description: str | None = None
    primary_language: str | None = None


class ContentKind(str, Enum):
    FILE = "file"
    README = "readme"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class ContentUnit:
    """One named block of text contributing to the corpus."""
    path: str
    text: str
    kind: ContentKind = ContentKind.FILE

    @property
    def is_synthetic(self) -> bool:
        return self.kind is ContentKind.SYNTHETIC


@dataclass(frozen=True)
class FetchResult:
    """Everything the content fetcher produced for one repository.

    ``used_fallback`` is True when no real file could be fetched and the
    units are the fixed synthetic set.
    """
    summary: RepositorySummary
    units: tuple[ContentUnit, ...]
    used_fallback: bool = False

    @property
    def file_count(self) -> int:
        return sum(1 for u in self.units if u.kind is ContentKind.FILE)


class Provenance(str, Enum):
    """Where the analyzed corpus came from."""
    PASTED = "pasted"
    REPOSITORY = "repository"
    SYNTHETIC_FALLBACK = "synthetic_fallback"


@dataclass(frozen=True)
class AnalysisRequest:
    corpus: str
    language_hint: str | None = None
    provenance: Provenance = Provenance.PASTED


@dataclass(frozen=True)
class Vulnerability:
    id: str
    title: str
    severity: Severity
    line: int
    description: str
    recommendation: str
    fixed_code: str
    code_snippet: str | None = None
    cwe: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "severity": self.severity,
            "line": self.line,
            "description": self.description,
            "recommendation": self.recommendation,
            "fixedCode": self.fixed_code,
        }
        if self.code_snippet is not None:
            data["codeSnippet"] = self.code_snippet
        if self.cwe is not None:
            data["cwe"] = self.cwe
        return data


@dataclass(frozen=True)
class AnalysisReport:
    """Canonical report handed to presentation. Immutable once built."""
    overall_score: float
    risk_level: RiskLevel
    summary: str
    language: str
    scan_duration_ms: int
    vulnerabilities: tuple[Vulnerability, ...] = field(default_factory=tuple)
    provenance: Provenance = Provenance.PASTED

    @property
    def is_synthetic(self) -> bool:
        return self.provenance is Provenance.SYNTHETIC_FALLBACK

    def to_dict(self) -> dict[str, object]:
        """Render the camelCase wire shape consumed by the browser."""
        return {
            "overallScore": self.overall_score,
            "riskLevel": self.risk_level,
            "summary": self.summary,
            "language": self.language,
            "vulnerabilities": [v.to_dict() for v in self.vulnerabilities],
            "scanDurationMs": self.scan_duration_ms,
            "provenance": self.provenance.value,
        }


@dataclass(frozen=True)
class ScanInput:
    """What the presentation layer submits for one scan.

    A non-blank ``repository_url`` takes precedence over ``pasted_code``.
    """
    pasted_code: str | None = None
    repository_url: str | None = None
    language_hint: str | None = None
