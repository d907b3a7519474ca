"""Regression checks for successive token registry snapshots."""
from token_checker.application.use_cases import RegistryValidationContext, ValidateRegistryUseCase
from token_checker.domain.services import RegistryValidator
from token_checker.infrastructure.repositories.csv_repositories import (
    CsvSnapshotRepository,
    GitSnapshotRepository,
)

__all__ = [
    "ValidateRegistryUseCase",
    "RegistryValidationContext",
    "RegistryValidator",
    "CsvSnapshotRepository",
    "GitSnapshotRepository",
]
