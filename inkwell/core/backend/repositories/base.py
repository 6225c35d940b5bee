"""
Base table repository and remote error translation.

Every table of the backend-as-a-service is reached through a ``TableRepository``,
a thin async wrapper over the Supabase query builder that maps rows to plain
dictionaries and remote failures to Inkwell's exception taxonomy.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import httpx
from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from supabase import AsyncClient

from inkwell.core.errors import (
    BackendError,
    ConflictError,
    InkwellError,
    NotFoundError,
    PermissionDeniedError,
)
from inkwell.core.logging_config import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]
Filters = Dict[str, Any]

# PostgreSQL / PostgREST error codes surfaced by the platform
UNIQUE_VIOLATION = "23505"
INSUFFICIENT_PRIVILEGE = "42501"
NO_ROWS = "PGRST116"

# Characters that would break the comma-separated PostgREST "or" syntax
_OR_SYNTAX_CHARS = re.compile(r"[,()]")


def translate_api_error(error: APIError, table: str, action: str) -> InkwellError:
    """Map a PostgREST error to the matching Inkwell error.

    Args:
        error: The error raised by the query builder
        table: Table the query ran against
        action: Query verb (select, insert, update, delete, count)

    Returns:
        An InkwellError subclass instance carrying the remote message and code
    """
    code = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error)
    details = getattr(error, "details", None)

    if code == UNIQUE_VIOLATION:
        return ConflictError(message, code=code, details=details)
    if code == INSUFFICIENT_PRIVILEGE:
        return PermissionDeniedError("Insufficient permissions for this operation", code=code, details=details)
    if code == NO_ROWS:
        return NotFoundError(message, code=code, details=details)
    return BackendError(f"{table}.{action} failed: {message}", code=code, details=details)


def search_pattern(term: str) -> str:
    """Build an ``ilike`` substring pattern, dropping characters of the or-filter syntax."""
    return f"%{_OR_SYNTAX_CHARS.sub('', term).strip()}%"


class TableRepository:
    """Async CRUD access to one remote table."""

    def __init__(self, client: AsyncClient, table: str) -> None:
        """Initialize repository with the shared client handle.

        Args:
            client: Supabase async client
            table: Name of the remote table
        """
        self.client = client
        self.table = table

    @staticmethod
    def _apply_filters(query: Any, filters: Optional[Filters]) -> Any:
        for column, value in (filters or {}).items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        return query

    async def _execute(self, query: Any, action: str) -> Any:
        try:
            return await query.execute()
        except APIError as e:
            logger.error(f"{self.table}.{action} rejected by backend: {getattr(e, 'message', e)}")
            raise translate_api_error(e, self.table, action) from e
        except httpx.HTTPError as e:
            logger.error(f"{self.table}.{action} transport failure: {e}")
            raise BackendError(f"{self.table}.{action} failed: {e}") from e

    async def select(
        self,
        columns: str = "*",
        filters: Optional[Filters] = None,
        search: Optional[Tuple[Sequence[str], str]] = None,
        in_: Optional[Tuple[str, Iterable[Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Read rows.

        Args:
            columns: Column list in PostgREST syntax
            filters: Equality filters; a None value matches NULL
            search: ``(columns, term)``; rows where any column ilike ``%term%``
            in_: ``(column, values)`` membership filter
            order_by: Column to order by
            descending: Order direction when ``order_by`` is set
            limit: Maximum number of rows

        Returns:
            List of rows as dictionaries
        """
        if in_ is not None:
            in_column, in_values = in_[0], list(in_[1])
            if not in_values:
                return []

        query = self._apply_filters(self.client.table(self.table).select(columns), filters)

        if search is not None:
            search_columns, term = search
            if term and term.strip():
                pattern = search_pattern(term)
                if len(search_columns) == 1:
                    query = query.ilike(search_columns[0], pattern)
                else:
                    query = query.or_(",".join(f"{column}.ilike.{pattern}" for column in search_columns))

        if in_ is not None:
            query = query.in_(in_column, in_values)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)

        response = await self._execute(query, "select")
        return list(response.data or [])

    async def first(self, filters: Filters, columns: str = "*") -> Optional[Row]:
        """Return the first row matching ``filters``, or None."""
        rows = await self.select(columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def get(self, row_id: Any, columns: str = "*") -> Optional[Row]:
        return await self.first({"id": row_id}, columns)

    async def count(self, filters: Optional[Filters] = None) -> int:
        """Exact number of rows matching ``filters``; no rows are transferred."""
        query = self.client.table(self.table).select("id", count=CountMethod.exact, head=True)
        response = await self._execute(self._apply_filters(query, filters), "count")
        return response.count or 0

    async def insert(self, row: Row) -> Row:
        """Insert one row and return it as stored."""
        response = await self._execute(self.client.table(self.table).insert(row), "insert")
        data = response.data or []
        return data[0] if data else dict(row)

    async def update(self, values: Row, filters: Filters) -> List[Row]:
        """Update matching rows and return them."""
        query = self._apply_filters(self.client.table(self.table).update(values), filters)
        response = await self._execute(query, "update")
        return list(response.data or [])

    async def delete(self, filters: Filters) -> List[Row]:
        """Delete matching rows and return them."""
        query = self._apply_filters(self.client.table(self.table).delete(), filters)
        response = await self._execute(query, "delete")
        return list(response.data or [])
