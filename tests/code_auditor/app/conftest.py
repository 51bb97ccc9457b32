"""Shared fixtures for app-level tests."""
import json

import httpx
import openai
import pytest

from code_auditor.app.config import (
    AnalysisConfig,
    AppConfig,
    DirectoryConfig,
    GitHubConfig,
    LLMConfig,
    LoggingConfig,
)
from code_auditor.infra.llm_adapters.types import LLMResponse, TokenUsage
from code_auditor.infra.oracle import Oracle

from fakes import SQLI_XSS_REPORT, RecordingLogger, create_mocked_container


class MockAdapter:
    """Structured adapter returning the canned SQLi/XSS report."""

    def __init__(self):
        self.prompts = []

    def generate(self, prompt, schema, *, schema_name="response", max_output_tokens=8192):
        self.prompts.append(prompt)
        return LLMResponse(text=json.dumps(SQLI_XSS_REPORT), usage=TokenUsage(10, 20, 30))


@pytest.fixture
def test_config(tmp_path):
    """Create test configuration with explicit values."""
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        llm=LLMConfig(api_key="test-key", provider_name="openai", model_name="gpt-5"),
        github=GitHubConfig(token="test-token"),
        analysis=AnalysisConfig(max_corpus_chars=60_000),
        logging=LoggingConfig(level="DEBUG"),
    )


@pytest.fixture
def app_env(tmp_path, monkeypatch):
    """Environment the CLI reads through AppConfig()."""
    monkeypatch.setenv("CODE_AUDITOR_DIRECTORIES__HOME", str(tmp_path))
    monkeypatch.setenv("CODE_AUDITOR_LLM__API_KEY", "test-key")
    return tmp_path


@pytest.fixture
def mock_adapter(monkeypatch):
    """Replace the provider SDK adapter behind the real Oracle."""
    adapter = MockAdapter()
    monkeypatch.setattr("code_auditor.infra.oracle.get_adapter", lambda *args, **kwargs: adapter)
    return adapter


@pytest.fixture
def mocked_container(test_config):
    container = create_mocked_container(test_config)
    yield container
    container.shutdown_resources()


@pytest.fixture
def mock_cli_container(monkeypatch):
    """Patch the CLI so every command runs against a mocked container."""
    created = []

    def _create(config=None):
        container = create_mocked_container(config)
        created.append(container)
        return container

    monkeypatch.setattr("code_auditor.app.cli._create_container", _create)
    return created


@pytest.fixture
def timing_out_oracle(monkeypatch):
    """Real Oracle whose provider SDK call times out."""
    class TimingOutAdapter:
        def generate(self, prompt, schema, *, schema_name="response", max_output_tokens=8192):
            raise openai.APITimeoutError(request=httpx.Request("POST", "https://llm.test/v1/responses"))

    monkeypatch.setattr("code_auditor.infra.oracle.get_adapter", lambda *args, **kwargs: TimingOutAdapter())
    return Oracle(provider="openai", model="gpt-5", api_key="test-key", logger=RecordingLogger())
