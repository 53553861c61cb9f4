"""Query failure types and the explicit result wrapper returned by services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

T = TypeVar("T")


class QueryError(Exception):
    """Base class for failures surfaced through QueryResult."""

    kind = "query_error"

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"kind": self.kind, "message": self.message, "operation": self.operation}


class StorageUnavailable(QueryError):
    """The store could not be reached (connection refused, locked, invalidated)."""

    kind = "storage_unavailable"


class FetchFailed(QueryError):
    """The store was reachable but the read failed (corrupt row, schema mismatch)."""

    kind = "fetch_failed"


class MalformedInput(QueryError):
    """An argument could not be interpreted. Never fatal to the query."""

    kind = "malformed_input"


def classify_storage_error(exc: SQLAlchemyError, operation: str) -> QueryError:
    """Map a SQLAlchemy exception onto the query failure taxonomy."""
    if isinstance(exc, OperationalError):
        return StorageUnavailable(str(exc.orig or exc), operation=operation)
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StorageUnavailable(str(exc.orig or exc), operation=operation)
    return FetchFailed(str(exc), operation=operation)


@dataclass
class QueryResult(Generic[T]):
    """Outcome of a read: data plus an optional failure.

    A failed result still carries an empty/zero ``data`` value so callers that
    only want to render something can do so, while ``failed`` tells
    "nothing matched" apart from "the query did not run".
    """

    data: T
    error: Optional[QueryError] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, data: T, warnings: Optional[list[str]] = None) -> "QueryResult[T]":
        return cls(data=data, warnings=list(warnings or []))

    @classmethod
    def failure(cls, error: QueryError, empty: T) -> "QueryResult[T]":
        return cls(data=empty, error=error)
