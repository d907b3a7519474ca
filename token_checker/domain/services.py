"""Domain services running every registry rule over a pair of snapshots."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from . import checks
from .checks import MintOracle
from .models import ExceptionLists, TokenRecord
from .results import CheckResult, ValidationReport, ValidationSummary

logger = logging.getLogger(__name__)


class RegistryValidator:
    """Compares a current registry snapshot against the previous one.

    ``is_valid_mint`` is the identifier format oracle; the infrastructure layer
    provides a base58 implementation.
    """

    def __init__(
        self,
        is_valid_mint: MintOracle,
        exceptions: ExceptionLists | None = None,
        min_decimals: int = 0,
        max_decimals: int = 9,
        max_added_per_run: int = 1,
    ) -> None:
        if exceptions is None:
            exceptions = ExceptionLists()
        self._is_valid_mint = is_valid_mint
        self._exceptions = exceptions
        self._min_decimals = min_decimals
        self._max_decimals = max_decimals
        self._max_added = max_added_per_run

    def compare(self, previous: Sequence[TokenRecord], current: Sequence[TokenRecord]) -> ValidationReport:
        results = (
            checks.detect_duplicate_mints(current),
            checks.detect_duplicate_symbols(
                previous, current, self._exceptions.allowed_duplicate_symbols
            ),
            checks.can_only_add_one_token(previous, current, max_added=self._max_added),
            checks.valid_mint_addresses(current, self._is_valid_mint),
            checks.valid_decimals(current, low=self._min_decimals, high=self._max_decimals),
            checks.no_edits_to_existing_records(previous, current),
            checks.is_community_validated(
                current, self._exceptions.allowed_not_community_validated
            ),
        )
        for result in results:
            logger.debug("%s: count=%d", result.kind.value, result.count)
            if result.failed:
                logger.warning("%s failed with %d error(s)", result.kind.value, result.count)

        summary = ValidationSummary(
            total_previous=len(previous),
            total_current=len(current),
            counts={result.kind: result.count for result in results},
            total_errors=self._total_errors(results),
            generated_at=datetime.now(timezone.utc),
        )
        return ValidationReport(summary=summary, results=results)

    @staticmethod
    def _total_errors(results: Sequence[CheckResult]) -> int:
        return sum(max(result.count, 0) for result in results)
