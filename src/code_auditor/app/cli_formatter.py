"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from ..core.domain.models import AnalysisReport, Provenance


def format_report(report: AnalysisReport) -> str:
    """Format an analysis report for human-readable CLI output.

    Findings are listed in the order the oracle returned them.
    """
    lines = []
    lines.append("=" * 80)
    lines.append("SECURITY ANALYSIS REPORT")
    lines.append("=" * 80)

    lines.append(f"\nScore: {report.overall_score:g}/100 | Risk: {report.risk_level.upper()}")
    lines.append(f"Language: {report.language} | Duration: {report.scan_duration_ms} ms")

    if report.provenance is Provenance.SYNTHETIC_FALLBACK:
        lines.append(
            "\nNOTE: no readable source file was found in the repository; "
            "this report covers built-in sample code."
        )

    lines.append(f"\nSummary:\n{report.summary}")

    lines.append("\n" + "-" * 80)
    lines.append(f"VULNERABILITIES ({len(report.vulnerabilities)})")
    lines.append("-" * 80)

    if not report.vulnerabilities:
        lines.append("\nNo vulnerabilities reported.")

    for i, v in enumerate(report.vulnerabilities, 1):
        location = f"line {v.line}" if v.line > 0 else "line unknown"
        cwe = f" [{v.cwe}]" if v.cwe else ""
        lines.append(f"\n{i}. [{v.severity}] {v.title}{cwe} ({location})")
        lines.append(f"   {v.description}")
        if v.code_snippet:
            lines.append(f"\n   Vulnerable code:\n{_indent(v.code_snippet)}")
        lines.append(f"\n   Recommendation: {v.recommendation}")
        lines.append(f"\n   Fixed code:\n{_indent(v.fixed_code)}")

    lines.append("\n" + "=" * 80)

    return "\n".join(lines)


def _indent(text: str, prefix: str = "      ") -> str:
    return "\n".join(prefix + line for line in text.splitlines())
