"""Database URL lookup for the psycopg adapter."""

from __future__ import annotations

import os

from dotenv import load_dotenv


def require_database_url(database_url: str | None = None) -> str:
    """Return `database_url`, falling back to `DATABASE_URL` from the environment or `.env`.

    Raises:
        RuntimeError: If no URL is given and none is configured.
    """

    if database_url:
        return database_url

    load_dotenv(".env")
    configured = os.getenv("DATABASE_URL")
    if not configured:
        raise RuntimeError("No database configured: pass a URL or set DATABASE_URL")
    return configured
