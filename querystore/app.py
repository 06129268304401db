"""Application composition root.

This module wires together configuration and the query store for tools built on querystore.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from querystore.config.settings import Settings
from querystore.sql.store import QueryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """Shared application dependencies."""

    settings: Settings
    store: QueryStore


def create_app(settings: Settings) -> App:
    """Create the application container and load `settings.queries_dir` if it exists."""

    store = QueryStore(reserved_names=settings.reserved_names)
    if settings.queries_dir.is_dir():
        store.load_dir(str(settings.queries_dir))
    else:
        logger.info("queries directory not found path=%s", settings.queries_dir)
    return App(settings=settings, store=store)
