from __future__ import annotations


AUTO_DETECT = "Auto-detect"

_LANGUAGE_HINTS = {
    "Python": "python",
    "JavaScript": "javascript",
    "TypeScript": "typescript",
    "Java": "java",
    "Go": "go",
    "PHP": "php",
    "C++": "cpp",
    "C#": "csharp",
    "Ruby": "ruby",
    "Shell": "bash",
    "PowerShell": "powershell",
    "HTML": "html",
    "CSS": "css",
}


def language_hint_for(primary_language: str | None) -> str | None:
    """Map a repository host language name to an analysis language hint."""
    if not primary_language:
        return None
    return _LANGUAGE_HINTS.get(primary_language)


def build_prompt(*, corpus: str, language_hint: str | None) -> str:
    """Build the security audit prompt for one corpus."""
    body = (
        "You are an expert Security Code Auditor and Penetration Tester.\n"
        "Analyze the following source code for security vulnerabilities.\n"
        "Focus on the OWASP Top 10, including but not limited to:\n"
        "- Injection (SQL, NoSQL, Command, etc.)\n"
        "- Broken Authentication\n"
        "- Sensitive Data Exposure (Hardcoded secrets, PII)\n"
        "- XML External Entities (XXE)\n"
        "- Broken Access Control\n"
        "- Security Misconfiguration\n"
        "- Cross-Site Scripting (XSS)\n"
        "- Insecure Deserialization\n\n"
        "Provide a strict assessment. If the code is secure, explain why.\n"
        "Score from 0 (critically vulnerable) to 100 (perfectly secure).\n"
        "Report every finding with the line where it starts (0 if unknown), "
        "an actionable recommendation and the fixed code.\n\n"
        f"Language Hint: {language_hint or AUTO_DETECT}\n\n"
        "Source Code:\n"
        "```\n"
        f"{corpus}\n"
        "```\n"
    )
    return body
