from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

from ..domain.models import (
    AnalysisRequest,
    ContentKind,
    ContentUnit,
    Provenance,
    RepositorySummary,
)


BLOCK_RULE = "# " + "=" * 50


@dataclass
class AssembledCorpus:
    """Result of corpus assembly with truncation metadata."""
    request: AnalysisRequest
    file_count: int
    dropped_paths: list[str] = field(default_factory=list)
    was_truncated: bool = False


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PayloadAssembler:
    """Domain service that turns fetched content into one analysis corpus.

    Per-unit ceilings are enforced by the fetcher. On top of that the
    assembler applies a global ceiling: trailing file blocks are dropped
    last-first until the corpus fits, and only if the header and readme
    alone are still too long is the text cut at the ceiling.
    """

    def __init__(self, *, max_corpus_chars: int) -> None:
        self._max_chars = max_corpus_chars

    def assemble(
        self,
        summary: RepositorySummary,
        units: Sequence[ContentUnit],
        *,
        scanned_at: datetime,
        language_hint: str | None = None,
    ) -> AssembledCorpus:
        """Assemble header, readme and file blocks into an AnalysisRequest.

        Args:
            summary: Repository metadata for the header block
            units: Content units in listing order
            scanned_at: Timestamp embedded in the header
            language_hint: Hint forwarded to the oracle

        Returns:
            AssembledCorpus wrapping the request
        """
        provenance = (
            Provenance.SYNTHETIC_FALLBACK
            if any(u.is_synthetic for u in units)
            else Provenance.REPOSITORY
        )

        preamble = _header(summary, scanned_at)
        for unit in units:
            if unit.kind is ContentKind.README:
                preamble += f"# README\n{unit.text}\n\n"

        blocks = [u for u in units if u.kind is not ContentKind.README]
        dropped: list[str] = []

        corpus = _join(preamble, blocks)
        while len(corpus) > self._max_chars and blocks:
            dropped.insert(0, blocks.pop().path)
            corpus = _join(preamble, blocks)

        was_truncated = bool(dropped)
        if len(corpus) > self._max_chars:
            corpus = corpus[: self._max_chars]
            was_truncated = True

        request = AnalysisRequest(
            corpus=corpus,
            language_hint=language_hint,
            provenance=provenance,
        )
        return AssembledCorpus(
            request=request,
            file_count=_file_count(blocks),
            dropped_paths=dropped,
            was_truncated=was_truncated,
        )

    def assemble_pasted(self, code: str, *, language_hint: str | None = None) -> AnalysisRequest:
        """Pasted code is analyzed verbatim."""
        return AnalysisRequest(
            corpus=code,
            language_hint=language_hint,
            provenance=Provenance.PASTED,
        )


def _header(summary: RepositorySummary, scanned_at: datetime) -> str:
    return (
        f"# Repository: {summary.full_name}\n"
        f"# Description: {summary.description or 'No description'}\n"
        f"# Primary Language: {summary.primary_language or 'Not specified'}\n"
        f"# Stars: {summary.star_count} | Forks: {summary.fork_count}\n"
        f"# Scanned on: {format_timestamp(scanned_at)}\n\n"
    )


def _block(unit: ContentUnit) -> str:
    marker = "SYNTHETIC" if unit.is_synthetic else "FILE"
    return f"\n# ===== {marker}: {unit.path} =====\n{unit.text}\n{BLOCK_RULE}\n"


def _file_count(blocks: Sequence[ContentUnit]) -> int:
    return sum(1 for u in blocks if u.kind is ContentKind.FILE)


def _join(preamble: str, blocks: Sequence[ContentUnit]) -> str:
    body = "".join(_block(u) for u in blocks)
    return f"{preamble}{body}\n# Total files analyzed: {_file_count(blocks)}"
