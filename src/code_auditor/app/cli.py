from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from .cli_formatter import format_report
from .config import AppConfig
from .main import _create_container, with_overrides
from ..core.domain.exceptions import ScanError
from ..core.domain.fallback import SAMPLE_VULNERABLE_CODE
from ..core.domain.models import ScanInput

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _read_code(file: Path | None, sample: bool) -> str | None:
    if sample:
        return SAMPLE_VULNERABLE_CODE
    if file is not None:
        return file.read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def _cli_config(log_level: str, *, provider: str | None = None, model: str | None = None) -> AppConfig:
    config = with_overrides(AppConfig(), provider=provider, model=model)
    logging_config = config.logging.model_copy(update={"level": log_level.upper(), "console_output": True})
    return config.model_copy(update={"logging": logging_config})


@app.command()
def scan(
    url: str | None = typer.Option(None, "--url", "-u", help="Repository URL, e.g. https://github.com/owner/repo"),
    file: Path | None = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Source file to analyze"),
    sample: bool = typer.Option(False, "--sample", help="Analyze the built-in vulnerable sample"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language hint (default: auto-detect)"),
    provider: str | None = typer.Option(None, "--provider", case_sensitive=False, help="LLM provider"),
    model: str | None = typer.Option(None, "--model", help="Model name"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
    json_output: bool = typer.Option(False, "--json", help="Output report as JSON"),
):
    """Scan a repository or pasted code (file or stdin) for security vulnerabilities."""
    config = _cli_config(log_level, provider=provider, model=model)

    if not config.llm.api_key:
        typer.echo("Error: API key required via CODE_AUDITOR_LLM__API_KEY", err=True)
        raise typer.Exit(code=2)

    code = None if url else _read_code(file, sample)

    container = _create_container(config)
    try:
        if url:
            typer.echo(f"Scanning repository: {url}", err=True)
        typer.echo(f"Provider: {config.llm.provider_name}, Model: {config.llm.model_name}", err=True)

        uc = container.scan_uc()
        report = uc.execute(ScanInput(pasted_code=code, repository_url=url, language_hint=language))

        if json_output:
            typer.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        else:
            typer.echo(format_report(report))

    except ScanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        # Always shutdown resources to close file handles
        container.shutdown_resources()


@app.command()
def prompt(
    url: str | None = typer.Option(None, "--url", "-u", help="Repository URL"),
    file: Path | None = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Source file"),
    sample: bool = typer.Option(False, "--sample", help="Use the built-in vulnerable sample"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language hint"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """Display the raw analysis prompt without calling the oracle."""
    config = _cli_config(log_level)
    code = None if url else _read_code(file, sample)

    container = _create_container(config)
    try:
        uc = container.prompt_uc()
        prompt_text = uc.execute(ScanInput(pasted_code=code, repository_url=url, language_hint=language))
        typer.echo(prompt_text)
    except ScanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Serve the scan API for the browser front end."""
    import uvicorn

    from .api import create_app

    config = _cli_config(log_level)
    if not config.llm.api_key:
        typer.echo("Error: API key required via CODE_AUDITOR_LLM__API_KEY", err=True)
        raise typer.Exit(code=2)

    container = _create_container(config)
    try:
        typer.echo(f"Serving on http://{host}:{port}")
        uvicorn.run(create_app(container), host=host, port=port, log_level=log_level.lower())
    finally:
        container.shutdown_resources()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
