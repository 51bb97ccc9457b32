import json

import pytest

import code_auditor
from code_auditor.core.domain.exceptions import EmptyInputError
from code_auditor.core.domain.fallback import SAMPLE_VULNERABLE_CODE
from code_auditor.infra.logging import SCAN_LOG_FILENAME


def test_scan_facade_runs_full_stack(test_config, mock_adapter, tmp_path):
    report = code_auditor.scan(pasted_code=SAMPLE_VULNERABLE_CODE, language_hint="python", config=test_config)

    assert report.overall_score == 25
    assert [v.title for v in report.vulnerabilities] == ["SQL Injection", "Cross-Site Scripting"]
    assert SAMPLE_VULNERABLE_CODE in mock_adapter.prompts[0]

    log_path = test_config.directories.logs_dir / SCAN_LOG_FILENAME
    events = [json.loads(line)["message"] for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert "scan_started" in events
    assert "llm_output" in events
    assert events[-1] == "scan_succeeded"


def test_scan_facade_requires_api_key(test_config, mock_adapter):
    config = test_config.model_copy(update={"llm": test_config.llm.model_copy(update={"api_key": None})})

    with pytest.raises(ValueError, match="API key required"):
        code_auditor.scan(pasted_code="x = 1", config=config)

    assert mock_adapter.prompts == []


def test_scan_facade_empty_input(test_config, mock_adapter):
    with pytest.raises(EmptyInputError):
        code_auditor.scan(pasted_code="", config=test_config)
    assert mock_adapter.prompts == []


def test_prompt_facade(test_config, mock_adapter):
    text = code_auditor.prompt(pasted_code="eval(input())", config=test_config)

    assert "eval(input())" in text
    assert "Language Hint: Auto-detect" in text
    assert mock_adapter.prompts == []
