"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import TokenRecord


class SnapshotRepository(Protocol):
    """Provides one ordered registry snapshot."""

    def list_token_records(self) -> Sequence[TokenRecord]:
        ...
