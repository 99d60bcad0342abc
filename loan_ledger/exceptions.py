"""Custom exception hierarchy for loan-ledger."""


class LedgerError(Exception):
    """Base exception for all loan-ledger errors."""


class RecordNotFoundError(LedgerError):
    """Raised when a referenced record does not exist."""


class DuplicateRecordError(LedgerError):
    """Raised when a record with the same id is already present."""


class InvalidRecordStateError(LedgerError):
    """Raised when a record is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class SerializationError(LedgerError):
    """Raised when a record cannot be converted to or from a model."""
