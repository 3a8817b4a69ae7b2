"""
Error taxonomy for the ledger core.
"""


class LedgerError(Exception):
    """Base class for ledger errors."""


class InvalidSpec(LedgerError, ValueError):
    """A recurrence spec is missing, malformed or lacks the anchors its frequency needs."""


class StoreUnavailable(LedgerError):
    """The transaction or app-state store cannot be reached."""


class PersistFailure(LedgerError):
    """A single transaction could not be written."""
