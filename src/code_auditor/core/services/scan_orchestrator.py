from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from ..domain.exceptions import EmptyInputError, ScanInProgressError
from ..domain.models import (
    AnalysisReport,
    RepositorySummary,
    ScanInput,
)
from ..domain.prompt import AUTO_DETECT, language_hint_for
from ..domain.reference import DEFAULT_HOST, parse_repository_url
from ..ports import ContentFetcherPort, LoggerPort
from .oracle_client import AnalysisOracleClient
from .payload_assembler import AssembledCorpus, PayloadAssembler
from .scan_state import ScanEvent, ScanState, ScanStateMachine


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScanSnapshot:
    """Read-only view of the current scan slot."""
    scan_id: int
    state: ScanState
    report: AnalysisReport | None = None
    error: Exception | None = None
    repository: RepositorySummary | None = None
    corpus: str | None = None
    used_fallback: bool = False


class ScanOrchestrator:
    """Runs one scan at a time through fetch, assemble and analyze.

    A second ``scan`` while one is in flight is rejected with
    ScanInProgressError; the running scan is not affected. Starting a scan
    discards the previous report and error.
    """

    def __init__(
        self,
        *,
        fetcher: ContentFetcherPort,
        assembler: PayloadAssembler,
        oracle_client: AnalysisOracleClient,
        logger: LoggerPort,
        repository_host: str = DEFAULT_HOST,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._assembler = assembler
        self._oracle_client = oracle_client
        self._logger = logger
        self._host = repository_host
        self._now = now

        self._lock = threading.Lock()
        self._machine = ScanStateMachine()
        self._scan_id = 0
        self._report: AnalysisReport | None = None
        self._error: Exception | None = None
        self._repository: RepositorySummary | None = None
        self._corpus: str | None = None
        self._used_fallback = False

    @property
    def snapshot(self) -> ScanSnapshot:
        with self._lock:
            return ScanSnapshot(
                scan_id=self._scan_id,
                state=self._machine.state,
                report=self._report,
                error=self._error,
                repository=self._repository,
                corpus=self._corpus,
                used_fallback=self._used_fallback,
            )

    def scan(self, scan_input: ScanInput) -> AnalysisReport:
        """Execute one scan.

        Args:
            scan_input: Pasted code and/or repository URL plus language hint

        Returns:
            The scan's AnalysisReport

        Raises:
            ScanInProgressError: If another scan is active
            ScanError: Any terminal failure of the scan (also recorded in snapshot)
        """
        repository_url = (scan_input.repository_url or "").strip()
        pasted_code = scan_input.pasted_code or ""

        rejection: EmptyInputError | None = None
        if repository_url:
            event = ScanEvent.START_REPOSITORY
        elif pasted_code.strip():
            event = ScanEvent.START_PASTED
        else:
            event = ScanEvent.FAILED
            rejection = EmptyInputError()

        with self._lock:
            if self._machine.is_active:
                raise ScanInProgressError()
            self._scan_id += 1
            scan_id = self._scan_id
            self._report = None
            self._error = rejection
            self._repository = None
            self._corpus = None
            self._used_fallback = False
            state = self._machine.fire(event)

        self._logger.info(
            "scan_started",
            type="scan_started",
            scan_id=scan_id,
            mode="repository" if repository_url else "pasted",
            repository_url=repository_url or None,
            language_hint=scan_input.language_hint,
        )
        self._log_state(scan_id, state)

        if rejection is not None:
            self._logger.error(
                "scan_failed",
                type="scan_failed",
                scan_id=scan_id,
                error_type=type(rejection).__name__,
                error=str(rejection),
            )
            raise rejection

        try:
            if event is ScanEvent.START_REPOSITORY:
                report = self._scan_repository(scan_id, repository_url, scan_input.language_hint)
            else:
                with self._lock:
                    self._corpus = pasted_code
                request = self._assembler.assemble_pasted(
                    pasted_code,
                    language_hint=scan_input.language_hint,
                )
                report = self._oracle_client.analyze(request)
        except BaseException as e:
            # interrupts must not leave the slot active
            with self._lock:
                self._error = e
                state = self._machine.fire(ScanEvent.FAILED)
            self._log_state(scan_id, state)
            self._logger.error(
                "scan_failed",
                type="scan_failed",
                scan_id=scan_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        with self._lock:
            self._report = report
            state = self._machine.fire(ScanEvent.SUCCEEDED)
        self._log_state(scan_id, state)
        self._logger.info(
            "scan_succeeded",
            type="scan_succeeded",
            scan_id=scan_id,
            overall_score=report.overall_score,
            risk_level=report.risk_level,
            vulnerability_count=len(report.vulnerabilities),
            scan_duration_ms=report.scan_duration_ms,
            provenance=report.provenance.value,
        )
        return report

    def prepare_repository_corpus(
        self, repository_url: str, language_hint: str | None = None
    ) -> AssembledCorpus:
        """Fetch and assemble without analyzing or touching the scan slot."""
        reference = parse_repository_url(repository_url, self._host)
        fetched = self._fetcher.fetch(reference)
        return self._assembler.assemble(
            fetched.summary,
            fetched.units,
            scanned_at=self._now(),
            language_hint=self._resolve_hint(language_hint, fetched.summary),
        )

    def _scan_repository(
        self, scan_id: int, repository_url: str, language_hint: str | None
    ) -> AnalysisReport:
        # invalid references fail before any network call
        reference = parse_repository_url(repository_url, self._host)

        fetched = self._fetcher.fetch(reference)
        with self._lock:
            self._repository = fetched.summary
            self._used_fallback = fetched.used_fallback
            state = self._machine.fire(ScanEvent.FETCHED)
        self._log_state(scan_id, state)

        assembled = self._assembler.assemble(
            fetched.summary,
            fetched.units,
            scanned_at=self._now(),
            language_hint=self._resolve_hint(language_hint, fetched.summary),
        )
        with self._lock:
            self._corpus = assembled.request.corpus
            state = self._machine.fire(ScanEvent.ASSEMBLED)

        self._logger.info(
            "corpus_assembled",
            type="corpus_assembled",
            scan_id=scan_id,
            corpus_len=len(assembled.request.corpus),
            file_count=assembled.file_count,
            provenance=assembled.request.provenance.value,
        )
        if assembled.was_truncated:
            self._logger.warning(
                "corpus_truncated",
                type="corpus_truncated",
                scan_id=scan_id,
                dropped_paths=assembled.dropped_paths,
            )
        self._log_state(scan_id, state)

        return self._oracle_client.analyze(assembled.request)

    @staticmethod
    def _resolve_hint(language_hint: str | None, summary: RepositorySummary) -> str | None:
        hint = (language_hint or "").strip()
        if hint and hint.lower() not in ("auto", AUTO_DETECT.lower()):
            return hint
        return language_hint_for(summary.primary_language)

    def _log_state(self, scan_id: int, state: ScanState) -> None:
        self._logger.debug("state_changed", type="state_changed", scan_id=scan_id, state=state.value)
