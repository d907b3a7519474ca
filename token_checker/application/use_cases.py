"""Application services orchestrating the registry validation workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from token_checker.config import Settings
from token_checker.domain.models import TokenRecord
from token_checker.domain.repositories import SnapshotRepository
from token_checker.domain.results import ValidationReport
from token_checker.domain.services import RegistryValidator
from token_checker.infrastructure.mint import is_valid_mint

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RegistryValidationContext:
    previous_repository: SnapshotRepository
    current_repository: SnapshotRepository
    validator: RegistryValidator


def build_validator(settings: Settings) -> RegistryValidator:
    return RegistryValidator(
        is_valid_mint=is_valid_mint,
        exceptions=settings.exceptions,
        min_decimals=settings.min_decimals,
        max_decimals=settings.max_decimals,
        max_added_per_run=settings.max_added_per_run,
    )


class ValidateRegistryUseCase:
    def __init__(self, context: RegistryValidationContext) -> None:
        self._context = context

    def execute(self) -> tuple[ValidationReport, Sequence[TokenRecord], Sequence[TokenRecord]]:
        previous_records = self._context.previous_repository.list_token_records()
        current_records = self._context.current_repository.list_token_records()
        logger.info("Comparing %d previous against %d current records", len(previous_records), len(current_records))
        report = self._context.validator.compare(previous_records, current_records)
        return report, previous_records, current_records
