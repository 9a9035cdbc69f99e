"""Typed exceptions for the record store.

Repository functions signal infrastructure failures (connection errors,
malformed rows, SQL errors) with these exceptions instead of returning
sentinel values. "No such row" stays a ``None``/empty result.

Callers at the login boundary map these to client-facing error codes; the
operation context and chained cause are for server-side logs only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


@dataclass(slots=True)
class DatabaseOperationContext:
    """Structured operation metadata carried by store exceptions.

    Attributes:
        operation: Stable operation identifier (for example
            ``"accounts.find_account_by_email"``).
        details: Optional human-readable context for logs.
    """

    operation: str
    details: str | None = None


class DatabaseError(RuntimeError):
    """Base exception for record store failures."""


class DatabaseOperationError(DatabaseError):
    """A repository operation failed.

    Args:
        context: Structured operation metadata.
        cause: Optional underlying exception.
    """

    def __init__(
        self,
        *,
        context: DatabaseOperationContext,
        cause: Exception | None = None,
    ) -> None:
        message = context.operation
        if context.details:
            message = f"{message}: {context.details}"
        super().__init__(message)
        self.context = context
        self.cause = cause


class DatabaseReadError(DatabaseOperationError):
    """Query failure."""


class DatabaseWriteError(DatabaseOperationError):
    """Insert/update/schema failure."""


def raise_read_error(operation: str, exc: Exception, *, details: str | None = None) -> NoReturn:
    """Raise a typed read error, chaining ``exc``. Typed errors pass through."""
    if isinstance(exc, DatabaseError):
        raise exc
    raise DatabaseReadError(
        context=DatabaseOperationContext(operation=operation, details=details),
        cause=exc,
    ) from exc


def raise_write_error(operation: str, exc: Exception, *, details: str | None = None) -> NoReturn:
    """Raise a typed write error, chaining ``exc``. Typed errors pass through."""
    if isinstance(exc, DatabaseError):
        raise exc
    raise DatabaseWriteError(
        context=DatabaseOperationContext(operation=operation, details=details),
        cause=exc,
    ) from exc
