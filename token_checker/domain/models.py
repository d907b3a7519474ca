"""Domain models for token registry validation.

These dataclasses capture the canonical shape of one registry row and of the
issues raised against it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence


class IssueKind(str, Enum):
    DUPLICATE_MINT = "DUPLICATE_MINT"
    DUPLICATE_SYMBOL = "DUPLICATE_SYMBOL"
    MULTIPLE_TOKENS_ADDED = "MULTIPLE_TOKENS_ADDED"
    INVALID_MINT = "INVALID_MINT"
    INVALID_DECIMALS = "INVALID_DECIMALS"
    CHANGES_TO_EXISTING_RECORD = "CHANGES_TO_EXISTING_RECORD"
    NOT_COMMUNITY_VALIDATED = "NOT_COMMUNITY_VALIDATED"


@dataclass(frozen=True)
class TokenRecord:
    """One registry entry as loaded from a snapshot.

    ``line`` is positional metadata and takes no part in equality, so two
    records compare equal when their published content is identical.
    """

    name: str
    symbol: str
    mint: str
    decimals: str | int
    logo_uri: str
    community_validated: bool
    line: int = field(default=0, compare=False)

    def content(self) -> tuple[str, str, str, str | int, str, bool]:
        return (
            self.name,
            self.symbol,
            self.mint,
            self.decimals,
            self.logo_uri,
            self.community_validated,
        )


@dataclass(frozen=True)
class AllowedException:
    """A ``(symbol, mint)`` pair grandfathered past a rule."""

    symbol: str
    mint: str

    def key(self) -> tuple[str, str]:
        return (self.symbol, self.mint)


@dataclass(frozen=True)
class ExceptionLists:
    allowed_duplicate_symbols: Sequence[AllowedException] = ()
    allowed_not_community_validated: Sequence[AllowedException] = ()


@dataclass(frozen=True)
class Issue:
    """A single violation reported by a check."""

    kind: IssueKind
    records: Sequence[TokenRecord]
    message: str
    line: int | None = None
    related: TokenRecord | None = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def record(self) -> TokenRecord | None:
        return self.records[0] if self.records else None
