"""Pure validation rules comparing two registry snapshots.

Each check takes the snapshots (and any reference data it needs) as explicit
arguments, never mutates them, and returns a :class:`CheckResult`. Checks do
not call each other; :class:`token_checker.domain.services.RegistryValidator`
runs them side by side.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, Sequence

from .models import AllowedException, Issue, IssueKind, TokenRecord
from .results import CheckResult

MintOracle = Callable[[str], bool]

HEADER_OFFSET = 2


def index_to_line_number(index: int) -> int:
    """Map a 0-based row index to its line in a file with one header row."""
    return index + HEADER_OFFSET


def records_equal(left: TokenRecord, right: TokenRecord) -> bool:
    return left.content() == right.content()


def detect_duplicate_mints(records: Sequence[TokenRecord]) -> CheckResult:
    seen: dict[str, TokenRecord] = {}
    issues: list[Issue] = []
    for record in records:
        original = seen.get(record.mint)
        if original is None:
            seen[record.mint] = record
            continue
        issues.append(
            Issue(
                kind=IssueKind.DUPLICATE_MINT,
                records=(record,),
                related=original,
                line=record.line,
                message=f"Mint {record.mint} on line {record.line} already listed on line {original.line}",
            )
        )
    return CheckResult(kind=IssueKind.DUPLICATE_MINT, count=len(issues), issues=tuple(issues))


def _duplicate_symbols(records: Iterable[TokenRecord]) -> list[TokenRecord]:
    # The first record of a symbol is never itself a duplicate.
    seen: set[str] = set()
    duplicates: list[TokenRecord] = []
    for record in records:
        if record.symbol in seen:
            duplicates.append(record)
        else:
            seen.add(record.symbol)
    return duplicates


def _symmetric_offenders(
    duplicates: Sequence[TokenRecord], allowed: Sequence[AllowedException]
) -> list[TokenRecord]:
    current_keys = {(record.symbol, record.mint) for record in duplicates}
    allowed_keys = {exception.key() for exception in allowed}
    difference = current_keys ^ allowed_keys

    offenders: list[TokenRecord] = []
    for key in sorted(difference):
        # Allowed keys with no current duplicate have nothing to resolve to.
        match = next((r for r in duplicates if (r.symbol, r.mint) == key), None)
        if match is not None:
            offenders.append(match)
    return offenders


def detect_duplicate_symbols(
    previous: Sequence[TokenRecord],
    current: Sequence[TokenRecord],
    allowed: Sequence[AllowedException],
) -> CheckResult:
    """Report growth of duplicate symbols beyond the frozen allow list.

    The returned count is ``len(current duplicates) - len(allowed)`` and is
    deliberately signed: zero or a negative value means the registry has no
    more duplicates than the baseline and is not an error.
    """
    previous_duplicates = _duplicate_symbols(previous)
    current_duplicates = sorted(_duplicate_symbols(current), key=lambda record: record.symbol)
    delta = len(current_duplicates) - len(allowed)
    details = {
        "previous_duplicates": len(previous_duplicates),
        "current_duplicates": len(current_duplicates),
        "allowed_duplicates": len(allowed),
    }

    issues: list[Issue] = []
    if delta > 0:
        for record in _symmetric_offenders(current_duplicates, allowed):
            issues.append(
                Issue(
                    kind=IssueKind.DUPLICATE_SYMBOL,
                    records=(record,),
                    line=record.line,
                    message=(
                        f"Symbol {record.symbol} ({record.mint}) is a new duplicate; "
                        f"the previous snapshot had {len(previous_duplicates)} duplicates"
                    ),
                    details=details,
                )
            )
    return CheckResult(
        kind=IssueKind.DUPLICATE_SYMBOL,
        count=delta,
        issues=tuple(issues),
        details=details,
    )


def can_only_add_one_token(
    previous: Sequence[TokenRecord],
    current: Sequence[TokenRecord],
    max_added: int = 1,
) -> CheckResult:
    """Flag a snapshot that appends more than ``max_added`` records.

    New records are assumed to be appended after the previous snapshot's rows,
    so everything from ``len(previous)`` onward is attributed as added. A
    reordered or mid-file insertion will be misattributed.
    """
    added = len(current) - len(previous)
    if added <= max_added:
        return CheckResult(kind=IssueKind.MULTIPLE_TOKENS_ADDED, count=0)

    offenders = tuple(current[len(previous):])
    issue = Issue(
        kind=IssueKind.MULTIPLE_TOKENS_ADDED,
        records=offenders,
        line=offenders[0].line,
        message=f"{added} tokens added in one change; at most {max_added} allowed",
        details={"added": added},
    )
    return CheckResult(kind=IssueKind.MULTIPLE_TOKENS_ADDED, count=1, issues=(issue,))


def no_edits_to_existing_records(
    previous: Sequence[TokenRecord], current: Sequence[TokenRecord]
) -> CheckResult:
    """Flag any previously published record whose content changed.

    Only meaningful when ``previous`` has unique mints: with duplicates the
    last row per mint is the one compared.
    """
    previous_by_mint = {record.mint: record for record in previous}
    issues: list[Issue] = []
    for record in current:
        before = previous_by_mint.get(record.mint)
        if before is None:
            continue
        if not records_equal(before, record):
            issues.append(
                Issue(
                    kind=IssueKind.CHANGES_TO_EXISTING_RECORD,
                    records=(record,),
                    related=before,
                    line=record.line,
                    message=f"Existing record for {record.mint} was modified",
                )
            )
    return CheckResult(
        kind=IssueKind.CHANGES_TO_EXISTING_RECORD, count=len(issues), issues=tuple(issues)
    )


def is_community_validated(
    records: Sequence[TokenRecord], allowed: Sequence[AllowedException]
) -> CheckResult:
    excepted = {exception.mint for exception in allowed}
    issues: list[Issue] = []
    for index, record in enumerate(records):
        if record.community_validated is True or record.mint in excepted:
            continue
        line = index_to_line_number(index)
        issues.append(
            Issue(
                kind=IssueKind.NOT_COMMUNITY_VALIDATED,
                records=(record,),
                line=line,
                message=f"{record.symbol} ({record.mint}) is not community validated",
            )
        )
    return CheckResult(
        kind=IssueKind.NOT_COMMUNITY_VALIDATED, count=len(issues), issues=tuple(issues)
    )


def valid_mint_addresses(records: Sequence[TokenRecord], is_valid_mint: MintOracle) -> CheckResult:
    issues: list[Issue] = []
    for record in records:
        reason = "not a 32-byte base58 address"
        try:
            if is_valid_mint(record.mint):
                continue
        except ValueError as exc:
            reason = str(exc)
        issues.append(
            Issue(
                kind=IssueKind.INVALID_MINT,
                records=(record,),
                line=record.line,
                message=f"Invalid mint {record.mint!r}: {reason}",
            )
        )
    return CheckResult(kind=IssueKind.INVALID_MINT, count=len(issues), issues=tuple(issues))


def _decimals_value(raw: str | int) -> Decimal | None:
    text = str(raw).strip()
    if not text:
        # A blank cell reads as zero decimals.
        return Decimal(0)
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def valid_decimals(records: Sequence[TokenRecord], low: int = 0, high: int = 9) -> CheckResult:
    issues: list[Issue] = []
    for record in records:
        value = _decimals_value(record.decimals)
        if value is not None and low <= value <= high:
            continue
        issues.append(
            Issue(
                kind=IssueKind.INVALID_DECIMALS,
                records=(record,),
                line=record.line,
                message=f"Decimals {record.decimals!r} outside [{low}, {high}]",
            )
        )
    return CheckResult(kind=IssueKind.INVALID_DECIMALS, count=len(issues), issues=tuple(issues))
