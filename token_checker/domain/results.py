"""Domain-level results for registry validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from .models import Issue, IssueKind


@dataclass(frozen=True)
class CheckResult:
    kind: IssueKind
    count: int
    issues: Sequence[Issue] = field(default_factory=tuple)
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def failed(self) -> bool:
        # Duplicate-symbol drift reports a signed delta; only a positive one fails.
        return self.count > 0


@dataclass(frozen=True)
class ValidationSummary:
    total_previous: int
    total_current: int
    counts: Mapping[IssueKind, int]
    total_errors: int
    generated_at: datetime


@dataclass(frozen=True)
class ValidationReport:
    summary: ValidationSummary
    results: Sequence[CheckResult] = field(default_factory=tuple)

    def has_issues(self) -> bool:
        return self.summary.total_errors > 0

    def result_for(self, kind: IssueKind) -> CheckResult:
        for result in self.results:
            if result.kind is kind:
                return result
        raise KeyError(kind)

    def iter_all_issues(self) -> Iterable[Issue]:
        for result in self.results:
            yield from result.issues
