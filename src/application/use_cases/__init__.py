"""Application use cases package."""

from .project_ledger import (
    LedgerProjection,
    ProjectLedgerFromSourceUseCase,
    ProjectLedgerUseCase,
)

__all__ = [
    "LedgerProjection",
    "ProjectLedgerFromSourceUseCase",
    "ProjectLedgerUseCase",
]
