"""Mint address format oracle."""
from __future__ import annotations

import base58

PUBLIC_KEY_LENGTH = 32


def decode_mint(value: str) -> bytes:
    """Decode a base58 mint, raising ``ValueError`` when it is malformed.

    Only the encoding and length are checked; the key need not lie on the
    ed25519 curve.
    """
    if not value:
        raise ValueError("mint is empty")
    decoded = base58.b58decode(value)
    if len(decoded) != PUBLIC_KEY_LENGTH:
        raise ValueError(f"decodes to {len(decoded)} bytes, expected {PUBLIC_KEY_LENGTH}")
    return decoded


def is_valid_mint(value: str) -> bool:
    decode_mint(value)
    return True
