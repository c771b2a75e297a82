"""Custom exception classes for Plutus."""
from typing import Optional


class PlutusError(Exception):
    """Base exception for Plutus."""
    pass


class ConfigError(PlutusError):
    """Configuration-related errors."""
    pass


class ValidationError(PlutusError):
    """Bad user input: empty fields, non-positive amount, unknown category."""
    pass


class StorageError(PlutusError):
    """Persisted state could not be read or decoded."""
    pass


class ExportError(PlutusError):
    """A CSV export or backup file could not be written."""
    pass


class AdvisoryError(PlutusError):
    """Base class for financial advice request failures."""
    pass


class MissingCredentialError(AdvisoryError):
    """No API key has been configured."""
    pass


class TransportError(AdvisoryError):
    """Network failure, non-success status or malformed advice response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
