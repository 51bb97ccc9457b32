from __future__ import annotations

from typing import Any, Protocol

from .domain.models import FetchResult, RepositoryReference


class ContentFetcherPort(Protocol):
    """Port for reading repository metadata and a bounded set of files."""

    def fetch(self, reference: RepositoryReference) -> FetchResult:
        """Fetch metadata, readme and up to N source files.

        Returns:
            FetchResult whose units preserve listing order; when no file
            could be read the units are the synthetic fallback set

        Raises:
            RepositoryUnavailableError: If the metadata request fails
            ContentUnavailableError: If the content listing request fails
        """
        ...


class OraclePort(Protocol):
    """Port for the remote structured-analysis service."""

    def generate(self, *, prompt: str, schema: dict[str, Any]) -> str:
        """Send one prompt constrained by a JSON schema and return the raw text."""
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Provides structured logging with keyword payload data.
    Implementations should handle JSON serialization and formatting.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        ...

    def exception(self, message: str, **kwargs: Any) -> None:
        ...
