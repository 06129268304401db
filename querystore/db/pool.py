"""Async Postgres pool for running parsed queries.

`ParsedQuery.positional_text` already uses PostgreSQL's own `$n` placeholders. psycopg's default
cursors expect `%s` and would reject that text, so every pooled connection is opened with
`AsyncRawCursor`, which passes the query and its positional arguments to the server unchanged.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection, AsyncRawCursor
from psycopg_pool import AsyncConnectionPool

from querystore.db.connection import require_database_url


def create_pool(
        database_url: str | None = None,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create a closed pool of raw-cursor connections.

    Open it with `await pool.open()` before use. Without `database_url`, `DATABASE_URL` is read
    from the environment or `.env`.
    """

    return AsyncConnectionPool(
        conninfo=require_database_url(database_url),
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        kwargs={"cursor_factory": AsyncRawCursor},
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Borrow a raw-cursor connection; it goes back to the pool on exit."""

    async with pool.connection() as conn:
        yield conn
