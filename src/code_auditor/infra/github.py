from __future__ import annotations

import base64
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.domain.exceptions import ContentUnavailableError, RepositoryUnavailableError
from ..core.domain.fallback import SYNTHETIC_UNITS
from ..core.domain.models import (
    ContentKind,
    ContentUnit,
    FetchResult,
    RepositoryReference,
    RepositorySummary,
)
from ..core.ports import LoggerPort


DEFAULT_API_BASE = "https://api.github.com"

SOURCE_FILE_PATTERN = re.compile(
    r"\.(py|js|ts|jsx|tsx|java|go|php|cpp|c|cs|rb|sh|bash|zsh|ps1|yml|yaml|json|xml|html|css|sql|md)$",
    re.IGNORECASE,
)

TRANSIENT_STATUSES = (429, 500, 502, 503, 504)


def select_entries(entries: list[dict[str, Any]], max_files: int) -> list[dict[str, Any]]:
    """Pick plain files with an allowed extension, in listing order, up to max_files."""
    selected: list[dict[str, Any]] = []
    for entry in entries:
        if len(selected) >= max_files:
            break
        if not isinstance(entry, dict) or entry.get("type") != "file":
            continue
        if SOURCE_FILE_PATTERN.search(str(entry.get("name", ""))):
            selected.append(entry)
    return selected


def build_session(*, token: str | None, max_retries: int) -> requests.Session:
    """Session with GitHub headers and bounded retry on transient statuses.

    max_retries=0 means every request is attempted exactly once.
    """
    session = requests.Session()
    session.headers["Accept"] = "application/vnd.github+json"
    if token:
        session.headers["Authorization"] = f"Bearer {token}"

    retry = Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        status=max_retries,
        backoff_factor=0.5,
        status_forcelist=TRANSIENT_STATUSES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class GitHubContentFetcher:
    """Reads repository metadata, readme and a bounded set of top-level files.

    Metadata and listing failures are terminal for the scan. Readme and
    per-file failures are logged and skipped.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        token: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 15.0,
        max_retries: int = 0,
        max_files: int = 5,
        file_max_chars: int = 8000,
        readme_max_chars: int = 1000,
        max_workers: int = 5,
        session: requests.Session | None = None,
    ) -> None:
        self._logger = logger
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._max_files = max_files
        self._file_max_chars = file_max_chars
        self._readme_max_chars = readme_max_chars
        self._max_workers = max(1, max_workers)
        self._session = session or build_session(token=token, max_retries=max_retries)

    def fetch(self, reference: RepositoryReference) -> FetchResult:
        summary = self._fetch_summary(reference)
        self._logger.info(
            "repository_metadata",
            type="repository_metadata",
            full_name=summary.full_name,
            primary_language=summary.primary_language,
            star_count=summary.star_count,
            fork_count=summary.fork_count,
        )

        units: list[ContentUnit] = []
        readme = self._fetch_readme(reference)
        if readme is not None:
            units.append(readme)

        entries = self._fetch_listing(reference)
        selected = select_entries(entries, self._max_files)
        files = self._fetch_files(selected)

        if not files:
            self._logger.warning(
                "content_fallback",
                type="content_fallback",
                repository=reference.slug,
                listing_len=len(entries),
                selected=len(selected),
            )
            return FetchResult(
                summary=summary,
                units=tuple(units) + SYNTHETIC_UNITS,
                used_fallback=True,
            )

        return FetchResult(summary=summary, units=tuple(units + files))

    def _get(self, url: str) -> requests.Response:
        return self._session.get(url, timeout=self._timeout)

    def _repo_url(self, reference: RepositoryReference, suffix: str = "") -> str:
        return f"{self._api_base}/repos/{reference.owner}/{reference.name}{suffix}"

    def _fetch_summary(self, reference: RepositoryReference) -> RepositorySummary:
        try:
            resp = self._get(self._repo_url(reference))
        except requests.RequestException as e:
            raise RepositoryUnavailableError(reference.slug, None) from e
        if not resp.ok:
            raise RepositoryUnavailableError(reference.slug, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise RepositoryUnavailableError(reference.slug, resp.status_code) from e
        if not isinstance(data, dict):
            raise RepositoryUnavailableError(reference.slug, resp.status_code)

        return RepositorySummary(
            full_name=data.get("full_name") or reference.slug,
            description=data.get("description") or None,
            star_count=int(data.get("stargazers_count") or 0),
            fork_count=int(data.get("forks_count") or 0),
            primary_language=data.get("language") or None,
            updated_at=str(data.get("updated_at") or ""),
        )

    def _fetch_readme(self, reference: RepositoryReference) -> ContentUnit | None:
        try:
            resp = self._get(self._repo_url(reference, "/readme"))
            if not resp.ok:
                self._logger.info(
                    "readme_unavailable",
                    type="readme_unavailable",
                    repository=reference.slug,
                    status_code=resp.status_code,
                )
                return None
            data = resp.json()
            encoded = data.get("content") if isinstance(data, dict) else None
            if not encoded:
                return None
            text = base64.b64decode(encoded).decode("utf-8", errors="replace")
        except (requests.RequestException, ValueError, TypeError) as e:
            self._logger.info(
                "readme_unavailable",
                type="readme_unavailable",
                repository=reference.slug,
                error=str(e),
            )
            return None

        path = data.get("path") or "README.md"
        return ContentUnit(
            path=path,
            text=text[: self._readme_max_chars],
            kind=ContentKind.README,
        )

    def _fetch_listing(self, reference: RepositoryReference) -> list[dict[str, Any]]:
        try:
            resp = self._get(self._repo_url(reference, "/contents"))
        except requests.RequestException as e:
            raise ContentUnavailableError(reference.slug) from e
        if not resp.ok:
            raise ContentUnavailableError(reference.slug, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ContentUnavailableError(reference.slug, resp.status_code) from e
        if not isinstance(data, list):
            raise ContentUnavailableError(reference.slug, resp.status_code)
        return data

    def _fetch_files(self, selected: list[dict[str, Any]]) -> list[ContentUnit]:
        if not selected:
            return []
        workers = min(self._max_workers, len(selected))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fetch") as pool:
            # map() yields in submission order, i.e. listing order
            results = list(pool.map(self._fetch_file, selected))
        return [unit for unit in results if unit is not None]

    def _fetch_file(self, entry: dict[str, Any]) -> ContentUnit | None:
        path = str(entry.get("path") or entry.get("name"))
        url = entry.get("download_url")
        if not url:
            self._logger.warning("file_fetch_failed", type="file_fetch_failed", path=path, error="no download_url")
            return None

        try:
            resp = self._get(url)
        except requests.RequestException as e:
            self._logger.warning("file_fetch_failed", type="file_fetch_failed", path=path, error=str(e))
            return None
        if not resp.ok:
            self._logger.warning(
                "file_fetch_failed",
                type="file_fetch_failed",
                path=path,
                status_code=resp.status_code,
            )
            return None

        return ContentUnit(path=path, text=resp.text[: self._file_max_chars])
