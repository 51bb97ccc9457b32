from __future__ import annotations

from dependency_injector import containers, providers

from ..core.services import (
    AnalysisOracleClient,
    JsonExtractor,
    PayloadAssembler,
    ReportNormalizer,
    ScanOrchestrator,
)
from ..core.usecases.prompt import PromptUseCase
from ..core.usecases.scan import ScanUseCase
from ..infra.github import GitHubContentFetcher
from ..infra.logging import ScanLogger
from ..infra.oracle import Oracle


class Container(containers.DeclarativeContainer):
    """DI container fed from AppConfig via ``config.from_pydantic``."""

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        ScanLogger,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        json_file=config.logging.json_file,
        level=config.logging.level,
    )

    # Adapters with injected config
    fetcher = providers.Singleton(
        GitHubContentFetcher,
        logger=logger,
        token=config.github.token,
        api_base=config.github.api_base,
        timeout=config.github.timeout_seconds,
        max_retries=config.github.max_retries,
        max_files=config.fetch.max_files,
        file_max_chars=config.fetch.file_max_chars,
        readme_max_chars=config.fetch.readme_max_chars,
        max_workers=config.fetch.max_workers,
    )

    oracle = providers.Factory(
        Oracle,
        provider=config.llm.provider_name,
        model=config.llm.model_name,
        api_key=config.llm.api_key,
        logger=logger,
        timeout=config.llm.timeout_seconds,
        max_output_tokens=config.llm.max_output_tokens,
    )

    # Domain services
    json_extractor = providers.Singleton(JsonExtractor)

    report_normalizer = providers.Factory(
        ReportNormalizer,
        logger=logger,
    )

    payload_assembler = providers.Factory(
        PayloadAssembler,
        max_corpus_chars=config.analysis.max_corpus_chars,
    )

    oracle_client = providers.Factory(
        AnalysisOracleClient,
        oracle=oracle,
        normalizer=report_normalizer,
        json_extractor=json_extractor,
        logger=logger,
    )

    # One scan slot per container
    scan_orchestrator = providers.Singleton(
        ScanOrchestrator,
        fetcher=fetcher,
        assembler=payload_assembler,
        oracle_client=oracle_client,
        logger=logger,
        repository_host=config.github.host,
    )

    # Use cases
    scan_uc = providers.Factory(
        ScanUseCase,
        orchestrator=scan_orchestrator,
    )

    prompt_uc = providers.Factory(
        PromptUseCase,
        orchestrator=scan_orchestrator,
    )
