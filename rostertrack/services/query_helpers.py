"""Shared plumbing for the read-only query services.

Every public service function returns a ``QueryResult``; the decorator here
turns storage exceptions into failed results so nothing propagates past the
service layer.
"""

from __future__ import annotations

import functools
import logging
import re
import unicodedata
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from rostertrack.config import settings
from rostertrack.errors import MalformedInput, QueryResult, classify_storage_error

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[QueryResult[Any]]])

_INTEGER_RE = re.compile(r"[+-]?\d+")


def degrade_on_storage_error(operation: str, empty: Callable[[], Any]) -> Callable[[F], F]:
    """Catch SQLAlchemy failures and return ``QueryResult.failure(..., empty())``.

    Args:
        operation: Name used in logs and on the error
        empty: Factory for the value a failed result carries
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> QueryResult[Any]:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                error = classify_storage_error(exc, operation)
                logger.exception("%s failed: %s", operation, error.kind)
                return QueryResult.failure(error, empty())

        return wrapper  # type: ignore[return-value]

    return decorator


def malformed(operation: str, message: str) -> str:
    """Log a non-fatal input problem and return it as a result warning."""
    error = MalformedInput(message, operation=operation)
    logger.warning("%s: %s", operation, error.message)
    return error.message


def fold_text(value: Optional[str]) -> str:
    """Case- and diacritic-insensitive form of a string ("Zoë" -> "zoe").

    Missing values fold to the empty string.
    """
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def parse_jersey_number(text: str) -> Optional[int]:
    """Return the integer value of ``text`` or None when it is not a plain integer."""
    candidate = text.strip()
    if not _INTEGER_RE.fullmatch(candidate):
        return None
    return int(candidate)


async def fetch_in_pages(
    db: AsyncSession,
    stmt: Select,
    *,
    limit: Optional[int] = None,
    page_size: Optional[int] = None,
    scalars: bool = True,
) -> list[Any]:
    """Run an ordered select in LIMIT/OFFSET pages until ``limit`` rows or exhaustion.

    ``stmt`` must carry a total ORDER BY so pages do not overlap.
    """
    size = page_size or settings.fetch_batch_size
    rows: list[Any] = []
    offset = 0

    while True:
        want = size if limit is None else min(size, limit - len(rows))
        if want <= 0:
            break

        result = await db.execute(stmt.limit(want).offset(offset))
        page = list(result.scalars().all()) if scalars else list(result.all())
        rows.extend(page)

        if len(page) < want:
            break
        offset += len(page)

    return rows
