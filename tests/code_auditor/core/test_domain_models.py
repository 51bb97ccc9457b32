import pytest

from code_auditor.core.domain.exceptions import InvalidReferenceError
from code_auditor.core.domain.models import (
    AnalysisReport,
    ContentKind,
    ContentUnit,
    FetchResult,
    Provenance,
    RepositoryReference,
    Vulnerability,
)
from code_auditor.core.domain.reference import parse_repository_url

from fakes import make_summary


class TestParseRepositoryUrl:
    """Tests for repository URL parsing."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octo/demo",
            "https://github.com/octo/demo/",
            "https://github.com/octo/demo.git",
            "github.com/octo/demo",
            "  https://github.com/octo/demo  ",
        ],
    )
    def test_accepts_owner_name_pairs(self, url):
        ref = parse_repository_url(url)
        assert ref == RepositoryReference(owner="octo", name="demo")

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "not a url",
            "https://gitlab.com/octo/demo",
            "https://github.com/octo",
            "https://github.com/octo/",
            "https://github.com/octo/demo/tree/main",
            "https://github.com//demo",
            "https://github.com/octo/.git",
        ],
    )
    def test_rejects_other_shapes(self, url):
        with pytest.raises(InvalidReferenceError) as exc_info:
            parse_repository_url(url)
        assert exc_info.value.reference == url

    def test_custom_host(self):
        ref = parse_repository_url("https://git.example.org/team/tool", host="git.example.org")
        assert ref.slug == "team/tool"

    def test_reference_url(self):
        ref = RepositoryReference(owner="octo", name="demo")
        assert ref.slug == "octo/demo"
        assert ref.url == "https://github.com/octo/demo"


class TestModels:
    def test_fetch_result_counts_only_files(self):
        result = FetchResult(
            summary=make_summary(),
            units=(
                ContentUnit(path="README.md", text="hi", kind=ContentKind.README),
                ContentUnit(path="a.py", text="x"),
                ContentUnit(path="b.js", text="y"),
            ),
        )
        assert result.file_count == 2

    def test_vulnerability_to_dict_omits_missing_optionals(self):
        v = Vulnerability(
            id="V1",
            title="SQL Injection",
            severity="Critical",
            line=3,
            description="d",
            recommendation="r",
            fixed_code="f",
        )
        data = v.to_dict()
        assert data["fixedCode"] == "f"
        assert "cwe" not in data
        assert "codeSnippet" not in data

    def test_report_to_dict_uses_wire_names(self):
        report = AnalysisReport(
            overall_score=80,
            risk_level="Low",
            summary="ok",
            language="go",
            scan_duration_ms=12,
            provenance=Provenance.SYNTHETIC_FALLBACK,
        )
        data = report.to_dict()
        assert data == {
            "overallScore": 80,
            "riskLevel": "Low",
            "summary": "ok",
            "language": "go",
            "vulnerabilities": [],
            "scanDurationMs": 12,
            "provenance": "synthetic_fallback",
        }
        assert report.is_synthetic is True
