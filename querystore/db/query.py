"""Run parsed queries on a psycopg connection.

Arguments are always passed by name and reordered through `ParsedQuery.prepare`; values are never
interpolated into the SQL text.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, LiteralString, cast

from psycopg import AsyncConnection

from querystore.sql.resolver import ParsedQuery


async def fetch_all(
        conn: AsyncConnection,
        query: ParsedQuery,
        args: Mapping[str, Any] | None = None,
) -> list[tuple[Any, ...]]:
    """Execute `query` and return all rows.

    The connection must use raw cursors (see `querystore.db.pool.create_pool`). DB errors are not
    swallowed.
    """

    params = query.prepare(args or {})
    async with conn.cursor() as cur:
        await cur.execute(cast(LiteralString, query.positional_text), params)
        if cur.description is None:
            return []
        return await cur.fetchall()


async def fetch_scalar(
        conn: AsyncConnection,
        query: ParsedQuery,
        args: Mapping[str, Any] | None = None,
) -> Any:
    """Execute `query` and return the first column of the first row (`None` if no rows)."""

    rows = await fetch_all(conn, query, args)
    if not rows:
        return None
    return rows[0][0]
