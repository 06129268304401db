"""Inspect query files from the command line.

Loads `.sql` files and directories into a `QueryStore` and prints each query's parameter ordinals
and its positional SQL, which is handy for checking what a file will send to the database.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from querystore.config.logging import configure_logging
from querystore.sql.resolver import DATETIME_FORMAT_TOKENS, ParsedQuery
from querystore.sql.sources import SourceUnavailableError
from querystore.sql.store import QueryStore, QueryStoreError


def load_paths(paths: list[str], *, exclude_reserved: bool) -> QueryStore:
    """Load every file or directory in `paths` into a new store."""

    store = QueryStore(reserved_names=DATETIME_FORMAT_TOKENS if exclude_reserved else frozenset())
    for path in paths:
        if Path(path).is_dir():
            store.load_dir(path)
        else:
            store.load_file(path)
    return store


def format_query(name: str, query: ParsedQuery) -> str:
    """Render one query as a `-- name:` block with its ordinal mapping."""

    params = ", ".join(f"${ordinal}={param}" for param, ordinal in _by_ordinal(query))
    return f"-- name: {name}\n-- params: {params or '(none)'}\n{query.positional_text}\n"


def _by_ordinal(query: ParsedQuery) -> list[tuple[str, int]]:
    return [(name, query.ordinal_map[name]) for name in query.names]


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for inspecting query files."""

    parser = argparse.ArgumentParser(description="Show named SQL queries in positional form.")
    parser.add_argument("paths", nargs="+", help="SQL files or directories to load.")
    parser.add_argument(
        "--name",
        action="append",
        default=[],
        help="Only print the named query (repeatable).",
    )
    parser.add_argument(
        "--exclude-reserved",
        action="store_true",
        help="Do not treat MI/SS date format tokens as parameters.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO).")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        store = load_paths(args.paths, exclude_reserved=args.exclude_reserved)
        names = args.name or store.names
        output = [format_query(name, store.query(name)) for name in names]
    except (QueryStoreError, SourceUnavailableError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("\n".join(output), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
