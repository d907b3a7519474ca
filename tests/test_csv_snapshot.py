from io import BytesIO
from pathlib import Path

import pytest

from token_checker.domain.checks import no_edits_to_existing_records
from token_checker.domain.errors import SnapshotFormatError, SnapshotLoadError
from token_checker.infrastructure.parsing.csv_snapshot import snapshot_to_records
from token_checker.infrastructure.repositories.csv_repositories import CsvSnapshotRepository

SNAPSHOT = (
    "Name,Symbol,Mint,Decimals,LogoURI,Community Validated\n"
    "Wrapped SOL,SOL,So11111111111111111111111111111111111111112,9,https://example.com/sol.png,true\n"
    "USD Coin,USDC,EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v,6,https://example.com/usdc.png,False\n"
    "Null Token,NULL,11111111111111111111111111111111,,,\n"
)


def test_records_carry_line_numbers_and_flags():
    records = snapshot_to_records(SNAPSHOT.encode("utf-8"))

    assert [r.line for r in records] == [2, 3, 4]
    assert records[0].symbol == "SOL"
    assert records[0].decimals == "9"
    assert records[0].community_validated is True
    assert records[1].community_validated is False
    assert records[2].decimals == ""
    assert records[2].logo_uri == ""
    assert records[2].community_validated is False


def test_values_are_not_coerced_to_numbers():
    text = "Name,Symbol,Mint,Decimals,LogoURI,Community Validated\nNaN,NA,M,06,,true\n"

    record = snapshot_to_records(BytesIO(text.encode("utf-8")))[0]

    assert record.name == "NaN"
    assert record.symbol == "NA"
    assert record.decimals == "06"


def test_missing_columns_rejected():
    with pytest.raises(SnapshotFormatError, match="Community Validated"):
        snapshot_to_records(b"Name,Symbol,Mint,Decimals,LogoURI\nA,B,C,1,\n")


def test_empty_snapshot_rejected():
    with pytest.raises(SnapshotFormatError):
        snapshot_to_records(b"")


def test_header_only_snapshot_is_empty():
    assert snapshot_to_records(b"Name,Symbol,Mint,Decimals,LogoURI,Community Validated\n") == []


def test_repository_reads_from_path(tmp_path: Path):
    path = tmp_path / "validated-tokens.csv"
    path.write_text(SNAPSHOT, encoding="utf-8")

    records = CsvSnapshotRepository(path).list_token_records()

    assert len(records) == 3


def test_repository_missing_file(tmp_path: Path):
    with pytest.raises(SnapshotLoadError):
        CsvSnapshotRepository(tmp_path / "missing.csv")


def test_invalid_utf8_rejected():
    data = b"Name,Symbol,Mint,Decimals,LogoURI,Community Validated\nBad\xff,B,M,6,,true\n"

    with pytest.raises(SnapshotFormatError, match="UTF-8"):
        snapshot_to_records(data)


def test_surrounding_whitespace_is_kept_and_counts_as_an_edit():
    previous = snapshot_to_records(b"Name,Symbol,Mint,Decimals,LogoURI,Community Validated\nUSD Coin,USDC,M1,6,,true\n")
    current = snapshot_to_records(b"Name,Symbol,Mint,Decimals,LogoURI,Community Validated\nUSD Coin,USDC ,M1,6,,true\n")

    assert current[0].symbol == "USDC "
    assert no_edits_to_existing_records(previous, current).count == 1
