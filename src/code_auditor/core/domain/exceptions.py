"""Domain exceptions for code_auditor."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for every failure that terminates a scan."""


class InvalidReferenceError(ScanError):
    """Raised when a repository URL does not name an owner/name pair."""

    def __init__(self, reference: str, message: str | None = None) -> None:
        self.reference = reference
        if message is None:
            message = (
                f"Invalid repository URL: {reference!r}. "
                "Use: https://github.com/<owner>/<repository>"
            )
        super().__init__(message)


class RepositoryUnavailableError(ScanError):
    """Raised when the repository metadata request does not succeed.

    ``status_code`` is None when the request never produced a response
    (connection refused, timeout, ...).
    """

    def __init__(self, slug: str, status_code: int | None) -> None:
        self.slug = slug
        self.status_code = status_code
        status = status_code if status_code is not None else "no response"
        super().__init__(f"Repository not found or inaccessible: {slug} ({status})")


class ContentUnavailableError(ScanError):
    """Raised when the top-level content listing cannot be read."""

    def __init__(self, slug: str, status_code: int | None = None) -> None:
        self.slug = slug
        self.status_code = status_code
        super().__init__(f"Could not access repository contents: {slug}")


class EmptyInputError(ScanError):
    """Raised before any network call when there is nothing to analyze."""

    def __init__(self, message: str = "Code cannot be empty.") -> None:
        super().__init__(message)


class OracleResponseInvalidError(ScanError):
    """Raised when the oracle returns nothing, or something that is not a JSON object.

    Provider transport failures (timeouts, refused connections, API errors)
    surface as this error too.
    """


class OracleResponseMalformedError(ScanError):
    """Raised when the oracle returns a JSON object that does not match the report schema."""

    def __init__(self, message: str, errors: list[dict[str, object]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class ScanInProgressError(ScanError):
    """Raised when a scan is requested while another one is still running."""

    def __init__(self, message: str = "A scan is already in progress.") -> None:
        super().__init__(message)
