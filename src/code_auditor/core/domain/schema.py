"""Report schema shared by the oracle request and the local validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import RiskLevel, Severity, RISK_LEVELS, SEVERITIES


REPORT_SCHEMA_NAME = "security_analysis_report"

VULNERABILITY_REQUIRED = [
    "id",
    "title",
    "severity",
    "line",
    "description",
    "recommendation",
    "fixedCode",
]

REPORT_REQUIRED = ["overallScore", "riskLevel", "summary", "vulnerabilities", "language"]

REPORT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "overallScore": {
            "type": "number",
            "description": "A security score from 0 to 100, where 100 is perfectly secure and 0 is critically vulnerable.",
        },
        "riskLevel": {
            "type": "string",
            "enum": list(RISK_LEVELS),
            "description": "The overall risk level of the provided code.",
        },
        "summary": {
            "type": "string",
            "description": "A concise executive summary of the security findings.",
        },
        "language": {
            "type": "string",
            "description": "The programming language detected.",
        },
        "vulnerabilities": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Unique identifier for the issue"},
                    "title": {"type": "string", "description": "Short title of the vulnerability (e.g., SQL Injection)"},
                    "severity": {
                        "type": "string",
                        "enum": list(SEVERITIES),
                        "description": "Severity level of the vulnerability",
                    },
                    "line": {"type": "integer", "description": "Line number where the issue starts"},
                    "description": {"type": "string", "description": "Detailed explanation of why this is a vulnerability"},
                    "codeSnippet": {"type": "string", "description": "The specific vulnerable code segment"},
                    "recommendation": {"type": "string", "description": "Actionable advice to fix the issue"},
                    "fixedCode": {"type": "string", "description": "Example of how the code should look after fixing"},
                    "cwe": {"type": "string", "description": "CWE ID if applicable (e.g., CWE-89)"},
                },
                "required": VULNERABILITY_REQUIRED,
            },
        },
    },
    "required": REPORT_REQUIRED,
}


class OracleVulnerability(BaseModel):
    model_config = ConfigDict(strict=True)

    id: str
    title: str
    severity: Severity
    line: int
    description: str
    recommendation: str
    fixed_code: str = Field(alias="fixedCode")
    code_snippet: str | None = Field(default=None, alias="codeSnippet")
    cwe: str | None = None


class OracleReport(BaseModel):
    """Oracle response as declared by REPORT_SCHEMA."""

    model_config = ConfigDict(strict=True)

    overall_score: float = Field(alias="overallScore", ge=0, le=100)
    risk_level: RiskLevel = Field(alias="riskLevel")
    summary: str
    language: str
    vulnerabilities: list[OracleVulnerability]
