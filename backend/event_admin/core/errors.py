"""
Error taxonomy for the event and registration writers.

Every error carries an ``ErrorKind`` and, where one exists, the underlying
cause (a pydantic error, a store error, a JSON decode error). Writers raise
these and never log them; the HTTP and admin layers decide how to surface
them.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    WRITE = "write"
    RECONCILIATION = "reconciliation"
    INPUT = "input"


class EventAdminError(Exception):
    """Base class for all writer-layer errors."""

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(kind={self.kind.value}, message={self.message!r})>"


class ValidationError(EventAdminError):
    """Payload failed schema validation, or an update carried no effective fields."""

    kind = ErrorKind.VALIDATION


class WriteError(EventAdminError):
    """The store rejected a write, or an update matched no rows."""

    kind = ErrorKind.WRITE


class ReconciliationError(EventAdminError):
    """A duplicate-key conflict occurred but the existing row could not be read back."""

    kind = ErrorKind.RECONCILIATION


class InputError(EventAdminError):
    """Admin form input was missing or not parseable."""

    kind = ErrorKind.INPUT
