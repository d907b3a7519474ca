"""Errors raised while loading snapshots; rule violations are never raised."""
from __future__ import annotations


class TokenCheckerError(Exception):
    """Base class for failures that stop a validation run."""


class SnapshotFormatError(TokenCheckerError, ValueError):
    """A snapshot could not be parsed into token records."""


class SnapshotLoadError(TokenCheckerError, RuntimeError):
    """A snapshot could not be read from its source."""


class ExceptionsLoadError(TokenCheckerError, ValueError):
    """The allowed-exception reference file is missing or unreadable."""
