"""Logging setup for the `querystore` CLI and applications embedding the store."""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Send `querystore` logs (file loads, duplicate names) to stderr.

    The level comes from `level`, then `LOG_LEVEL`, then `INFO`. The psycopg driver and pool are
    kept at `WARNING` so connection chatter does not drown out query loading.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=log_level, format=_FORMAT)
    logging.getLogger("querystore").setLevel(log_level)

    for name in ("psycopg", "psycopg.pool"):
        logging.getLogger(name).setLevel(logging.WARNING)
