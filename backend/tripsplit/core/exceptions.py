"""
Domain errors raised by the ledger services.

Routes never build these into responses themselves; the handlers registered
in ``tripsplit.main`` translate them to HTTP status codes.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed or missing input."""


class AuthorizationError(LedgerError):
    """Requester does not own the trip the resource belongs to."""


class ConflictError(LedgerError):
    """Unique constraint would be violated, e.g. duplicate trip title."""


class NotFoundError(LedgerError):
    """Referenced id does not resolve within the requester's scope."""
