"""CSV snapshot parser producing canonical token records."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Sequence

import pandas as pd

from token_checker.domain.checks import index_to_line_number
from token_checker.domain.errors import SnapshotFormatError
from token_checker.domain.models import TokenRecord
from token_checker.infrastructure.parsing.utils import cell_text, ensure_bytes, parse_flag

logger = logging.getLogger(__name__)

COLUMNS = {
    "name": "Name",
    "symbol": "Symbol",
    "mint": "Mint",
    "decimals": "Decimals",
    "logo_uri": "LogoURI",
    "community_validated": "Community Validated",
}


def read_snapshot_raw(source: BytesIO | Path) -> pd.DataFrame:
    try:
        frame = pd.read_csv(source, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise SnapshotFormatError("Snapshot is empty") from exc
    except pd.errors.ParserError as exc:
        raise SnapshotFormatError(f"Snapshot is not valid CSV: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SnapshotFormatError(f"Snapshot is not valid UTF-8: {exc}") from exc
    frame.columns = [str(column).strip() for column in frame.columns]
    missing = [column for column in COLUMNS.values() if column not in frame.columns]
    if missing:
        raise SnapshotFormatError(f"Snapshot is missing columns: {', '.join(missing)}")
    return frame


def snapshot_to_records(source: BytesIO | Path | bytes) -> Sequence[TokenRecord]:
    raw_bytes = ensure_bytes(source)
    frame = read_snapshot_raw(BytesIO(raw_bytes))

    records: list[TokenRecord] = []
    for position, row in enumerate(frame.itertuples(index=False)):
        values = dict(zip(frame.columns, row))
        records.append(
            TokenRecord(
                name=cell_text(values[COLUMNS["name"]]),
                symbol=cell_text(values[COLUMNS["symbol"]]),
                mint=cell_text(values[COLUMNS["mint"]]),
                decimals=cell_text(values[COLUMNS["decimals"]]),
                logo_uri=cell_text(values[COLUMNS["logo_uri"]]),
                community_validated=parse_flag(values[COLUMNS["community_validated"]]),
                line=index_to_line_number(position),
            )
        )
    logger.info("Loaded %d token records", len(records))
    return records
