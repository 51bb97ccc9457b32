from __future__ import annotations

from .config import AppConfig
from .container import Container
from ..core.domain.models import AnalysisReport, ScanInput


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def with_overrides(
    config: AppConfig,
    *,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    github_token: str | None = None,
) -> AppConfig:
    """Return a copy of config with runtime overrides applied."""
    llm_updates = {
        key: value
        for key, value in (("provider_name", provider), ("model_name", model), ("api_key", api_key))
        if value
    }
    updates = {}
    if llm_updates:
        updates["llm"] = config.llm.model_copy(update=llm_updates)
    if github_token:
        updates["github"] = config.github.model_copy(update={"token": github_token})
    return config.model_copy(update=updates) if updates else config


def scan(
    *,
    pasted_code: str | None = None,
    repository_url: str | None = None,
    language_hint: str | None = None,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    github_token: str | None = None,
    config: AppConfig | None = None,
) -> AnalysisReport:
    """Scan pasted code or a repository for security vulnerabilities.

    Args:
        pasted_code: Source code to analyze (used when no repository_url is given)
        repository_url: Repository URL, e.g. https://github.com/owner/name
        language_hint: Language hint for the oracle (optional)
        provider: LLM provider override (optional)
        model: LLM model override (optional)
        api_key: LLM API key override (optional, otherwise from config/env)
        github_token: GitHub token override (optional, otherwise from config/env)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Analysis report

    Raises:
        ValueError: If the LLM API key is missing
        ScanError: If the scan fails
    """
    config = with_overrides(
        config or AppConfig(),
        provider=provider,
        model=model,
        api_key=api_key,
        github_token=github_token,
    )
    if not config.llm.api_key:
        raise ValueError("API key required via CODE_AUDITOR_LLM__API_KEY")

    container = _create_container(config)
    try:
        uc = container.scan_uc()
        return uc.execute(
            ScanInput(
                pasted_code=pasted_code,
                repository_url=repository_url,
                language_hint=language_hint,
            )
        )
    finally:
        container.shutdown_resources()


def prompt(
    *,
    pasted_code: str | None = None,
    repository_url: str | None = None,
    language_hint: str | None = None,
    github_token: str | None = None,
    config: AppConfig | None = None,
) -> str:
    """Return the prompt a scan would send, without calling the oracle.

    Args:
        pasted_code: Source code to analyze
        repository_url: Repository URL (fetched and assembled)
        language_hint: Language hint (optional)
        github_token: GitHub token override (optional)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Prompt text
    """
    config = with_overrides(config or AppConfig(), github_token=github_token)
    container = _create_container(config)
    try:
        uc = container.prompt_uc()
        return uc.execute(
            ScanInput(
                pasted_code=pasted_code,
                repository_url=repository_url,
                language_hint=language_hint,
            )
        )
    finally:
        container.shutdown_resources()
