"""Shared parsing utilities for snapshot ingestion."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path


def ensure_bytes(source: BytesIO | Path | str | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, (Path, str)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def cell_text(value: object) -> str:
    """Cell content exactly as published; surrounding whitespace is kept."""
    if value is None:
        return ""
    return str(value)


def clean_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_flag(value: object) -> bool:
    """Only the literal ``true`` (any case) counts as set."""
    return clean_text(value).lower() == "true"
