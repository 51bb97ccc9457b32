"""HTTP surface consumed by the browser front end."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .container import Container
from ..core.domain.exceptions import (
    ContentUnavailableError,
    EmptyInputError,
    InvalidReferenceError,
    OracleResponseInvalidError,
    OracleResponseMalformedError,
    RepositoryUnavailableError,
    ScanError,
    ScanInProgressError,
)
from ..core.domain.models import ScanInput


_STATUS_BY_ERROR: dict[type[ScanError], int] = {
    InvalidReferenceError: 400,
    EmptyInputError: 400,
    ScanInProgressError: 409,
    RepositoryUnavailableError: 502,
    ContentUnavailableError: 502,
    OracleResponseInvalidError: 502,
    OracleResponseMalformedError: 502,
}


class ScanRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pasted_code: str | None = Field(default=None, alias="pastedCode")
    repository_url: str | None = Field(default=None, alias="repositoryUrl")
    language_hint: str | None = Field(default=None, alias="languageHint")


def error_body(error: Exception) -> dict[str, object]:
    body: dict[str, object] = {"error": type(error).__name__, "message": str(error)}
    if isinstance(error, RepositoryUnavailableError):
        body["statusCode"] = error.status_code
    if isinstance(error, OracleResponseMalformedError):
        body["errors"] = error.errors
    return body


def create_app(container: Container, *, allow_origins: list[str] | None = None) -> FastAPI:
    """Build the FastAPI app around an initialized container.

    Scan handlers are sync, so FastAPI runs them in its thread pool; a second
    POST while a scan is running gets 409 from the orchestrator.
    """
    app = FastAPI(title="code_auditor", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins or ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScanError)
    async def _scan_error_handler(request: Request, exc: ScanError) -> JSONResponse:
        status = _STATUS_BY_ERROR.get(type(exc), 500)
        return JSONResponse(status_code=status, content=error_body(exc))

    @app.post("/api/scan")
    def post_scan(body: ScanRequestBody) -> dict[str, Any]:
        uc = container.scan_uc()
        report = uc.execute(
            ScanInput(
                pasted_code=body.pasted_code,
                repository_url=body.repository_url,
                language_hint=body.language_hint,
            )
        )
        return report.to_dict()

    @app.get("/api/scan")
    def get_scan() -> dict[str, Any]:
        snapshot = container.scan_orchestrator().snapshot
        repository = snapshot.repository
        return {
            "scanId": snapshot.scan_id,
            "state": snapshot.state.value,
            "usedFallback": snapshot.used_fallback,
            "error": error_body(snapshot.error) if snapshot.error is not None else None,
            "report": snapshot.report.to_dict() if snapshot.report is not None else None,
            "repository": (
                {
                    "name": repository.full_name,
                    "description": repository.description,
                    "stars": repository.star_count,
                    "forks": repository.fork_count,
                    "language": repository.primary_language,
                    "updated": repository.updated_at,
                }
                if repository is not None
                else None
            ),
        }

    return app
