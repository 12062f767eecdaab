"""Project-wide custom exceptions."""

from __future__ import annotations


class LedgerCliError(Exception):
    """Base exception for the ledger CLI suite."""


class ConfigurationError(LedgerCliError):
    """Raised when configuration loading or validation fails."""


class DecodeError(LedgerCliError):
    """Raised when a statement file cannot be decoded."""


class StatementFormatError(DecodeError):
    """Raised when a file is not an MT940 statement (wrong init tag)."""


class MalformedRecordError(DecodeError):
    """Raised when a single tagged record has an unusable payload."""
