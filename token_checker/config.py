"""Central configuration for the token checker package."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from token_checker.domain.models import ExceptionLists
from token_checker.infrastructure.storage.exceptions_store import DEFAULT_PATH, load_exceptions

MIN_DECIMALS = 0
MAX_DECIMALS = 9
MAX_ADDED_PER_RUN = 1


@dataclass(slots=True, frozen=True)
class Settings:
    exceptions_path: Path
    exceptions: ExceptionLists
    min_decimals: int = MIN_DECIMALS
    max_decimals: int = MAX_DECIMALS
    max_added_per_run: int = MAX_ADDED_PER_RUN


def load_settings(exceptions_path: Path | None = None) -> Settings:
    """Build settings, reading the exception baseline when called.

    Raises :class:`ExceptionsLoadError` when an explicit ``exceptions_path`` is
    missing, or when any exceptions file is unreadable.
    """
    path = Path(exceptions_path) if exceptions_path is not None else DEFAULT_PATH
    return Settings(exceptions_path=path, exceptions=load_exceptions(exceptions_path))
