"""Storage helpers for the allowed-exception reference lists."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from token_checker.domain.errors import ExceptionsLoadError
from token_checker.domain.models import AllowedException, ExceptionLists

DEFAULT_PATH = Path(os.environ.get(
    "TOKEN_CHECKER_EXCEPTIONS",
    Path(__file__).resolve().parents[3] / "allowed_exceptions.json",
))

DUPLICATE_SYMBOLS_KEY = "allowed_duplicate_symbols"
NOT_COMMUNITY_VALIDATED_KEY = "allowed_not_community_validated"


def _normalize_entries(raw: Any) -> tuple[AllowedException, ...]:
    entries: list[AllowedException] = []
    if not isinstance(raw, list):
        return tuple(entries)
    for item in raw:
        if not isinstance(item, dict):
            continue
        mint = str(item.get("Mint") or "").strip()
        if not mint:
            continue
        symbol = str(item.get("Symbol") or "").strip()
        entries.append(AllowedException(symbol=symbol, mint=mint))
    return tuple(entries)


def _entries_to_json(entries: tuple[AllowedException, ...]) -> list[dict[str, str]]:
    return [{"Symbol": entry.symbol, "Mint": entry.mint} for entry in sorted(entries, key=AllowedException.key)]


def load_exceptions(path: Path | None = None) -> ExceptionLists:
    """Load the exception lists from ``path`` or the default baseline.

    A missing default file means no exceptions; a missing explicit path is an
    error.
    """
    source = Path(path) if path is not None else DEFAULT_PATH
    if not source.exists():
        if path is not None:
            raise ExceptionsLoadError(f"Exceptions file not found: {source}")
        return ExceptionLists()
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ExceptionsLoadError(f"Cannot read exceptions file {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ExceptionsLoadError(f"Exceptions file {source} must hold a JSON object")
    return ExceptionLists(
        allowed_duplicate_symbols=_normalize_entries(data.get(DUPLICATE_SYMBOLS_KEY)),
        allowed_not_community_validated=_normalize_entries(data.get(NOT_COMMUNITY_VALIDATED_KEY)),
    )


def save_exceptions(exceptions: ExceptionLists, path: Path | None = None) -> ExceptionLists:
    target = Path(path) if path is not None else DEFAULT_PATH
    payload = {
        DUPLICATE_SYMBOLS_KEY: _entries_to_json(tuple(exceptions.allowed_duplicate_symbols)),
        NOT_COMMUNITY_VALIDATED_KEY: _entries_to_json(tuple(exceptions.allowed_not_community_validated)),
    }
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return load_exceptions(target)
