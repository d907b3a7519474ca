from token_checker.domain.models import AllowedException, ExceptionLists, IssueKind, TokenRecord
from token_checker.domain.services import RegistryValidator


def make_record(mint: str, symbol: str, validated: bool = True, line: int = 0) -> TokenRecord:
    return TokenRecord(
        name=f"{symbol} token",
        symbol=symbol,
        mint=mint,
        decimals="6",
        logo_uri="",
        community_validated=validated,
        line=line,
    )


def accept_all(mint: str) -> bool:
    return True


def test_no_differences():
    validator = RegistryValidator(is_valid_mint=accept_all)
    previous = [make_record("X", "AAA")]
    current = [make_record("X", "AAA"), make_record("Y", "BBB")]

    report = validator.compare(previous, current)

    assert report.summary.total_errors == 0
    assert report.summary.total_previous == 1
    assert report.summary.total_current == 2
    assert not report.has_issues()
    assert tuple(report.iter_all_issues()) == ()


def test_every_check_is_reported():
    validator = RegistryValidator(is_valid_mint=accept_all)

    report = validator.compare([], [])

    assert set(report.summary.counts) == set(IssueKind)


def test_negative_symbol_delta_does_not_hide_other_errors():
    exceptions = ExceptionLists(
        allowed_duplicate_symbols=(AllowedException("AAA", "Z1"), AllowedException("BBB", "Z2")),
    )
    validator = RegistryValidator(is_valid_mint=accept_all, exceptions=exceptions)
    previous = [make_record("X", "AAA")]
    current = [make_record("X", "AAA"), make_record("Y", "BBB", validated=False)]

    report = validator.compare(previous, current)

    assert report.result_for(IssueKind.DUPLICATE_SYMBOL).count == -2
    assert report.result_for(IssueKind.NOT_COMMUNITY_VALIDATED).count == 1
    assert report.summary.total_errors == 1
    assert report.has_issues()


def test_exception_lists_are_applied():
    exceptions = ExceptionLists(
        allowed_duplicate_symbols=(AllowedException("AAA", "Y"),),
        allowed_not_community_validated=(AllowedException("AAA", "Y"),),
    )
    validator = RegistryValidator(is_valid_mint=accept_all, exceptions=exceptions)
    previous = [make_record("X", "AAA")]
    current = [make_record("X", "AAA"), make_record("Y", "AAA", validated=False)]

    report = validator.compare(previous, current)

    assert not report.has_issues()


def test_invalid_mint_oracle_is_injected():
    validator = RegistryValidator(is_valid_mint=lambda mint: mint != "bad")

    report = validator.compare([], [make_record("bad", "AAA")])

    assert report.summary.counts[IssueKind.INVALID_MINT] == 1
    assert report.has_issues()


def test_compare_is_idempotent():
    validator = RegistryValidator(is_valid_mint=accept_all)
    previous = [make_record("X", "AAA")]
    current = [make_record("X", "AAB"), make_record("Y", "AAA"), make_record("Z", "AAA")]

    first = validator.compare(previous, current)
    second = validator.compare(previous, current)

    assert first.results == second.results
    assert first.summary.counts == second.summary.counts
    assert first.summary.total_errors == second.summary.total_errors == 3
