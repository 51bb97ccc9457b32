from __future__ import annotations

from ..domain.models import AnalysisReport, ScanInput
from ..services import ScanOrchestrator


class ScanUseCase:
    """Use case for scanning pasted code or a repository.

    Thin orchestration layer that delegates to ScanOrchestrator.
    """

    def __init__(self, *, orchestrator: ScanOrchestrator) -> None:
        self._orchestrator = orchestrator

    def execute(self, scan_input: ScanInput) -> AnalysisReport:
        """Execute one scan.

        Args:
            scan_input: Pasted code or repository URL plus optional language hint

        Returns:
            Analysis report
        """
        return self._orchestrator.scan(scan_input)
