import pytest

from code_auditor.core.domain.schema import REPORT_SCHEMA
from code_auditor.infra.llm_adapters.openai_adapter import OpenAIStructuredAdapter, to_strict_schema
from code_auditor.infra.llm_adapters.types import TokenUsage


class DummyResponse:
    def __init__(self, text: str) -> None:
        self.output_text = text
        self.usage = TokenUsage(input_tokens=1, output_tokens=2, total_tokens=3)


class DummyResponsesClient:
    def __init__(self):
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return DummyResponse('{"overallScore": 90}')


class DummyOpenAI:
    def __init__(self, *, api_key: str, timeout: float, max_retries: int):
        assert api_key == "sk-openai-test"
        self.timeout = timeout
        self.max_retries = max_retries
        self.responses = DummyResponsesClient()


@pytest.fixture
def dummy_client(monkeypatch):
    import code_auditor.infra.llm_adapters.openai_adapter as mod

    holder = {}

    def _factory(**kwargs):
        holder["client"] = DummyOpenAI(**kwargs)
        return holder["client"]

    monkeypatch.setattr(mod, "OpenAI", _factory)
    return holder


def test_openai_adapter_requests_strict_json_schema(dummy_client):
    adapter = OpenAIStructuredAdapter("gpt-5", "sk-openai-test", timeout=30.0)

    response = adapter.generate("audit this", REPORT_SCHEMA, schema_name="security_analysis_report", max_output_tokens=100)

    client = dummy_client["client"]
    assert client.timeout == 30.0
    assert client.max_retries == 0
    kwargs = client.responses.kwargs
    assert kwargs["model"] == "gpt-5"
    assert kwargs["input"] == "audit this"
    assert kwargs["max_output_tokens"] == 100
    fmt = kwargs["text"]["format"]
    assert fmt["type"] == "json_schema"
    assert fmt["name"] == "security_analysis_report"
    assert fmt["strict"] is True
    assert fmt["schema"]["additionalProperties"] is False
    assert response.text == '{"overallScore": 90}'
    assert response.usage.total_tokens == 3


def test_to_strict_schema_makes_optionals_nullable():
    strict = to_strict_schema(REPORT_SCHEMA)
    item = strict["properties"]["vulnerabilities"]["items"]

    assert set(item["required"]) == set(item["properties"])
    assert item["additionalProperties"] is False
    assert item["properties"]["cwe"]["type"] == ["string", "null"]
    assert item["properties"]["severity"]["type"] == "string"
    # source schema is left untouched
    assert "additionalProperties" not in REPORT_SCHEMA


def test_token_usage_sums_missing_total():
    assert TokenUsage.from_counts(4, 6).total_tokens == 10
    assert TokenUsage.from_counts(4, 6, 12).total_tokens == 12
    assert TokenUsage.from_counts(None, None).total_tokens is None
