from __future__ import annotations

from ..domain.exceptions import EmptyInputError
from ..domain.models import ScanInput
from ..domain.prompt import build_prompt
from ..services import ScanOrchestrator


class PromptUseCase:
    """Use case for generating and displaying the analysis prompt.

    Shows the raw prompt that would be sent to the oracle for a given input,
    without calling the oracle.
    """

    def __init__(self, *, orchestrator: ScanOrchestrator) -> None:
        self._orchestrator = orchestrator

    def execute(self, scan_input: ScanInput) -> str:
        """Generate and return the analysis prompt.

        Raises:
            EmptyInputError: If neither a repository URL nor code is given
        """
        repository_url = (scan_input.repository_url or "").strip()
        if repository_url:
            assembled = self._orchestrator.prepare_repository_corpus(
                repository_url, scan_input.language_hint
            )
            return build_prompt(
                corpus=assembled.request.corpus,
                language_hint=assembled.request.language_hint,
            )

        code = scan_input.pasted_code or ""
        if not code.strip():
            raise EmptyInputError()
        return build_prompt(corpus=code, language_hint=scan_input.language_hint)
