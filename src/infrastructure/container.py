"""Composition root for wiring infrastructure adapters."""

from src.application.ports.ledger_source import LedgerSourcePort
from src.application.use_cases.project_ledger import (
    ProjectLedgerFromSourceUseCase,
)
from src.domain.models.projection import GraphRange
from src.domain.services.calendar import default_graph_range
from src.infrastructure.json_ledger_source import JsonLedgerSource
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ProjectionSettings


def build_ledger_source(
    settings: ProjectionSettings | None = None,
) -> LedgerSourcePort:
    """Return the configured ledger source."""
    resolved = settings or ProjectionSettings.from_env()
    if resolved.ledger_file is None:
        raise RuntimeError("Projection requires a LEDGER_FILE value.")
    return JsonLedgerSource(resolved.ledger_file, logger=get_app_logger())


def build_graph_range(
    settings: ProjectionSettings | None = None,
) -> GraphRange:
    """Return the projection range from settings."""
    resolved = settings or ProjectionSettings.from_env()
    return default_graph_range(
        resolved.projection_start,
        resolved.projection_days,
    )


def build_project_ledger_use_case(
    settings: ProjectionSettings | None = None,
) -> ProjectLedgerFromSourceUseCase:
    """Return the projection use case wired to the configured source."""
    return ProjectLedgerFromSourceUseCase(
        ledger_source=build_ledger_source(settings),
        logger=get_app_logger(),
    )


__all__ = [
    "build_ledger_source",
    "build_graph_range",
    "build_project_ledger_use_case",
]
