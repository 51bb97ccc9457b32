"""Test doubles shared across the suite."""
import json
import threading
from typing import Any

from code_auditor.core.domain.models import (
    ContentUnit,
    FetchResult,
    RepositoryReference,
    RepositorySummary,
)


SQLI_XSS_REPORT = {
    "overallScore": 25,
    "riskLevel": "High",
    "summary": "User input reaches SQL and HTML without sanitization.",
    "language": "python",
    "vulnerabilities": [
        {
            "id": "VULN-1",
            "title": "SQL Injection",
            "severity": "Critical",
            "line": 7,
            "description": "The username is concatenated into the query.",
            "codeSnippet": "query = \"SELECT * FROM users WHERE username = '\" + username + \"'\"",
            "recommendation": "Use parameterized queries.",
            "fixedCode": "cursor.execute('SELECT * FROM users WHERE username = ?', (username,))",
            "cwe": "CWE-89",
        },
        {
            "id": "VULN-2",
            "title": "Cross-Site Scripting",
            "severity": "High",
            "line": 14,
            "description": "User input is embedded in HTML without escaping.",
            "recommendation": "Escape output with html.escape.",
            "fixedCode": "return '<h1>Profile for ' + html.escape(user_input) + '</h1>'",
            "cwe": "CWE-79",
        },
    ],
}


class RecordingLogger:
    """LoggerPort that keeps every event in memory."""

    def __init__(self):
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, message: str, kwargs: dict[str, Any]) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("debug", message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("info", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("warning", message, kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._record("error", message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        self._record("error", message, kwargs)

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]

    def find(self, message: str) -> dict[str, Any]:
        for _, m, kwargs in self.records:
            if m == message:
                return kwargs
        raise AssertionError(f"no log record {message!r}")


class ScriptedOracle:
    """OraclePort returning scripted responses in order.

    An Exception instance in the script is raised instead of returned.
    """

    def __init__(self, *responses: Any):
        self._responses = list(responses) or [json.dumps(SQLI_XSS_REPORT)]
        self.calls: list[dict[str, Any]] = []

    def generate(self, *, prompt: str, schema: dict[str, Any]) -> str:
        self.calls.append({"prompt": prompt, "schema": schema})
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def make_summary(**overrides: Any) -> RepositorySummary:
    values: dict[str, Any] = {
        "full_name": "octo/demo",
        "description": "Demo repository",
        "star_count": 42,
        "fork_count": 7,
        "primary_language": "Python",
        "updated_at": "2024-05-01T10:00:00Z",
    }
    values.update(overrides)
    return RepositorySummary(**values)


class StaticFetcher:
    """ContentFetcherPort returning a fixed result or raising a fixed error."""

    def __init__(self, result: FetchResult | None = None, error: BaseException | None = None):
        self._result = result or FetchResult(
            summary=make_summary(),
            units=(ContentUnit(path="app.py", text="print('hello')"),),
        )
        self._error = error
        self.references: list[RepositoryReference] = []

    def fetch(self, reference: RepositoryReference) -> FetchResult:
        self.references.append(reference)
        if self._error is not None:
            raise self._error
        return self._result


class BlockingFetcher(StaticFetcher):
    """Fetcher that parks inside fetch() until released."""

    def __init__(self, result: FetchResult | None = None):
        super().__init__(result)
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch(self, reference: RepositoryReference) -> FetchResult:
        self.entered.set()
        self.release.wait(timeout=5)
        return super().fetch(reference)


class SteppingClock:
    """Monotonic clock advancing by a fixed step per reading."""

    def __init__(self, step: float = 0.25):
        self._now = 100.0
        self._step = step

    def __call__(self) -> float:
        current = self._now
        self._now += self._step
        return current


def create_mocked_container(config, *, fetcher=None, oracle=None):
    """Container with the repository host and the oracle replaced by fakes."""
    from dependency_injector import providers

    from code_auditor.app.container import Container

    container = Container()
    container.config.from_pydantic(config)
    container.fetcher.override(providers.Object(fetcher or StaticFetcher()))
    container.oracle.override(providers.Object(oracle or ScriptedOracle()))
    container.init_resources()
    return container
