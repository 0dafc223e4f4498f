"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from datetime import date
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DEFAULT_PROJECTION_DAYS = 365


@dataclass(frozen=True)
class ProjectionSettings:
    """Settings for loading and projecting a ledger.

    Attributes:
        ledger_file: Optional path to the JSON ledger document.
        projection_days: Number of days projected after the start date.
        projection_start: First projected day.
    """

    ledger_file: Optional[Path] = None
    projection_days: int = DEFAULT_PROJECTION_DAYS
    projection_start: date = field(default_factory=date.today)

    @classmethod
    def from_env(cls) -> "ProjectionSettings":
        """Build settings from environment variables.

        Returns:
            ProjectionSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        raw_ledger = os.getenv("LEDGER_FILE")
        if raw_ledger:
            ledger_file = cls._normalize_path(raw_ledger, logger=logger)
        else:
            ledger_file = cls._default_ledger_file(logger=logger)
        return cls(
            ledger_file=ledger_file,
            projection_days=cls._parse_days(
                os.getenv("PROJECTION_DAYS"),
                logger=logger,
            ),
            projection_start=cls._parse_start(
                os.getenv("PROJECTION_START"),
                logger=logger,
            ),
        )

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the ledger file path or ``file://`` URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path: Normalized filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Ledger file does not exist at {path}")
        return path

    @staticmethod
    def _default_ledger_file(logger) -> Path | None:
        """Return a default ledger path when available.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single ledger is found in data/.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.json"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .json ledgers found in data/. "
                "Set LEDGER_FILE to choose one."
            )
        return None

    @staticmethod
    def _parse_days(raw_days: str | None, logger) -> int:
        if not raw_days:
            return DEFAULT_PROJECTION_DAYS
        try:
            days = int(raw_days)
        except ValueError:
            logger.warning(
                f"Invalid PROJECTION_DAYS '{raw_days}', "
                f"using {DEFAULT_PROJECTION_DAYS}"
            )
            return DEFAULT_PROJECTION_DAYS
        if days < 0:
            logger.warning(
                f"Negative PROJECTION_DAYS '{raw_days}', "
                f"using {DEFAULT_PROJECTION_DAYS}"
            )
            return DEFAULT_PROJECTION_DAYS
        return days

    @staticmethod
    def _parse_start(raw_start: str | None, logger) -> date:
        if not raw_start:
            return date.today()
        try:
            return date.fromisoformat(raw_start)
        except ValueError:
            logger.warning(
                f"Invalid PROJECTION_START '{raw_start}'. "
                "Expected format YYYY-MM-DD."
            )
            return date.today()


__all__ = ["ProjectionSettings", "DEFAULT_PROJECTION_DAYS"]
