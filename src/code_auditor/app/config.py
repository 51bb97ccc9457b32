from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "code_auditor"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)


class DirectoryConfig(BaseModel):
    """Directory configuration with computed paths."""

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all code_auditor data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Logs directory for scan logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class LLMConfig(BaseModel):
    """Analysis oracle (LLM) configuration."""

    api_key: str | None = Field(
        default=None,
        description="LLM API key (supports OpenAI, Anthropic)",
    )

    provider_name: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic)",
    )

    model_name: str = Field(
        default="gpt-5",
        description="LLM model name",
    )

    timeout_seconds: float = Field(
        default=120.0,
        description="Timeout for the single oracle request",
    )

    max_output_tokens: int = Field(
        default=8192,
        description="Upper bound on generated report tokens",
    )


class GitHubConfig(BaseModel):
    """Repository host configuration."""

    token: str | None = Field(
        default=None,
        description="Optional GitHub token, sent as a bearer credential",
    )

    api_base: str = Field(
        default="https://api.github.com",
        description="REST API base URL",
    )

    host: str = Field(
        default="github.com",
        description="Host marker expected in repository URLs",
    )

    timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for each repository host request",
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        description="Retries with exponential backoff on 429/5xx and connection errors (0 = single attempt)",
    )


class FetchConfig(BaseModel):
    """Bounds on what is read from a repository."""

    max_files: int = Field(default=5, ge=1, description="Maximum number of top-level files to read")
    file_max_chars: int = Field(default=8000, ge=1, description="Per-file character ceiling")
    readme_max_chars: int = Field(default=1000, ge=0, description="Readme character ceiling")
    max_workers: int = Field(default=5, ge=1, description="Concurrent file downloads")


class AnalysisConfig(BaseModel):
    """Analysis-specific settings."""

    max_corpus_chars: int = Field(
        default=60_000,
        description="Global corpus ceiling (trailing files are dropped first when exceeded)",
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    logger_name: str = Field(default="code_auditor")
    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    console_output: bool = Field(default=False, description="Mirror log events to stderr")
    json_file: bool = Field(default=True, description="Append JSON lines to <logs_dir>/scans.jsonl")


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with CODE_AUDITOR_ prefix.
    Use double underscore for nested config: CODE_AUDITOR_LLM__API_KEY

    Example env vars:
        # Required for scanning
        export CODE_AUDITOR_LLM__API_KEY=sk-xxxxxxxxxxxxx

        # Optional (with defaults)
        export CODE_AUDITOR_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx
        export CODE_AUDITOR_LLM__PROVIDER_NAME=openai
        export CODE_AUDITOR_LLM__MODEL_NAME=gpt-5
        export CODE_AUDITOR_FETCH__MAX_FILES=5
        export CODE_AUDITOR_ANALYSIS__MAX_CORPUS_CHARS=60000
        export CODE_AUDITOR_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix="CODE_AUDITOR_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
