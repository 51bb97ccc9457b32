from __future__ import annotations

from .json_extractor import JsonExtractor
from .payload_assembler import AssembledCorpus, PayloadAssembler
from .report_normalizer import ReportNormalizer
from .oracle_client import AnalysisOracleClient
from .scan_state import ScanEvent, ScanState, ScanStateMachine, InvalidTransitionError
from .scan_orchestrator import ScanOrchestrator, ScanSnapshot

__all__ = [
    "JsonExtractor",
    "AssembledCorpus",
    "PayloadAssembler",
    "ReportNormalizer",
    "AnalysisOracleClient",
    "ScanEvent",
    "ScanState",
    "ScanStateMachine",
    "InvalidTransitionError",
    "ScanOrchestrator",
    "ScanSnapshot",
]
