"""Tests for the HTTP surface."""
import json

import pytest
from fastapi.testclient import TestClient

from code_auditor.app.api import create_app
from code_auditor.core.domain.exceptions import RepositoryUnavailableError

from fakes import SQLI_XSS_REPORT, ScriptedOracle, StaticFetcher, create_mocked_container


@pytest.fixture
def client(mocked_container):
    return TestClient(create_app(mocked_container))


def test_post_scan_pasted_code(client):
    resp = client.post("/api/scan", json={"pastedCode": "eval(input())", "languageHint": "python"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["overallScore"] == 25
    assert body["riskLevel"] == "High"
    assert [v["cwe"] for v in body["vulnerabilities"]] == ["CWE-89", "CWE-79"]
    assert body["provenance"] == "pasted"


def test_get_scan_reports_latest_state(client):
    assert client.get("/api/scan").json()["state"] == "idle"

    client.post("/api/scan", json={"repositoryUrl": "https://github.com/octo/demo"})
    body = client.get("/api/scan").json()

    assert body["state"] == "succeeded"
    assert body["error"] is None
    assert body["usedFallback"] is False
    assert body["repository"]["name"] == "octo/demo"
    assert body["repository"]["stars"] == 42
    assert body["report"]["provenance"] == "repository"


@pytest.mark.parametrize(
    "payload,error",
    [
        ({}, "EmptyInputError"),
        ({"pastedCode": "   "}, "EmptyInputError"),
        ({"repositoryUrl": "https://gitlab.com/octo/demo"}, "InvalidReferenceError"),
    ],
)
def test_post_scan_bad_input_is_400(client, payload, error):
    resp = client.post("/api/scan", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"] == error
    assert client.get("/api/scan").json()["state"] == "failed"


def test_repository_unavailable_is_502(test_config):
    container = create_mocked_container(
        test_config, fetcher=StaticFetcher(error=RepositoryUnavailableError("octo/missing", 404))
    )
    try:
        resp = TestClient(create_app(container)).post(
            "/api/scan", json={"repositoryUrl": "https://github.com/octo/missing"}
        )
    finally:
        container.shutdown_resources()

    assert resp.status_code == 502
    assert resp.json()["error"] == "RepositoryUnavailableError"
    assert resp.json()["statusCode"] == 404


def test_malformed_oracle_response_is_502(test_config):
    data = json.loads(json.dumps(SQLI_XSS_REPORT))
    del data["riskLevel"]
    container = create_mocked_container(test_config, oracle=ScriptedOracle(json.dumps(data)))
    try:
        resp = TestClient(create_app(container)).post("/api/scan", json={"pastedCode": "x = 1"})
    finally:
        container.shutdown_resources()

    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "OracleResponseMalformedError"
    assert body["errors"][0]["loc"] == "riskLevel"


def test_llm_timeout_is_502(test_config, timing_out_oracle):
    container = create_mocked_container(test_config, oracle=timing_out_oracle)
    try:
        client = TestClient(create_app(container))
        resp = client.post("/api/scan", json={"pastedCode": "x = 1"})
        state = client.get("/api/scan").json()["state"]
    finally:
        container.shutdown_resources()

    assert resp.status_code == 502
    assert resp.json()["error"] == "OracleResponseInvalidError"
    assert state == "failed"
