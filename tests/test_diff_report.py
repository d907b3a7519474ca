import csv
import io

from token_checker.domain.models import TokenRecord
from token_checker.domain.services import RegistryValidator
from token_checker.presentation.diff_report import issues_to_rows, render_csv, render_html, render_text


def make_record(mint: str, name: str, line: int) -> TokenRecord:
    return TokenRecord(
        name=name,
        symbol="TKN",
        mint=mint,
        decimals="6",
        logo_uri="",
        community_validated=True,
        line=line,
    )


def build_report():
    validator = RegistryValidator(is_valid_mint=lambda mint: True)
    previous = [make_record("X", "<old>", 2)]
    current = [make_record("X", "<new>", 2)]
    return validator.compare(previous, current)


def test_rows_describe_each_issue():
    report = build_report()

    rows = issues_to_rows(tuple(report.iter_all_issues()))

    assert len(rows) == 1
    assert rows[0]["kind"] == "CHANGES_TO_EXISTING_RECORD"
    assert rows[0]["line"] == "2"
    assert rows[0]["related_line"] == "2"
    assert rows[0]["mint"] == "X"


def test_csv_has_header_even_without_issues():
    validator = RegistryValidator(is_valid_mint=lambda mint: True)
    report = validator.compare([], [])

    content = render_csv(tuple(report.iter_all_issues())).decode("utf-8")

    assert content.splitlines()[0].startswith("kind,line,symbol,mint")
    assert len(list(csv.DictReader(io.StringIO(content)))) == 0


def test_html_table_lists_issues():
    html = render_html(build_report())

    assert "<table>" in html
    assert "CHANGES_TO_EXISTING_RECORD" in html


def test_text_summary():
    text = render_text(build_report())

    assert "Total errors: 1" in text
    assert "CHANGES_TO_EXISTING_RECORD at line 2" in text
