from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base error raised by the posting engine and ledger queries."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(LedgerError):
    """Raised when a structural or arithmetic ledger invariant would be violated."""

    code = "VALIDATION_ERROR"


class NotFoundError(LedgerError):
    """Raised when an account, fiscal period or journal entry does not exist."""

    code = "NOT_FOUND"

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} not found", details={"resource": resource})


class DatabaseError(LedgerError):
    """Raised when the store rejects the atomic commit for a non-referential reason."""

    code = "DATABASE_ERROR"

    def __init__(self, message: str = "database operation failed", original: BaseException | None = None) -> None:
        self.original = original
        super().__init__(message)
