"""In-memory registry of parsed queries.

Queries are loaded from `.sql` files (see `querystore.sql.scanner`) and stored by block name.
Names are unique across everything loaded into one store. Each file is committed atomically: if
any block collides with an existing name, nothing from that file is stored.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Collection, Iterable

from querystore.sql.resolver import ParsedQuery, resolve
from querystore.sql.scanner import scan_blocks
from querystore.sql.sources import (
    FileSystemSource,
    LineSource,
    PackageResourceSource,
    QuerySource,
    SourceUnavailableError,
    is_sql_path,
)

logger = logging.getLogger(__name__)


class QueryStoreError(Exception):
    """Base class for registry errors."""


class DuplicateQueryError(QueryStoreError, ValueError):
    """Raised when a loaded block reuses a name that is already registered."""

    def __init__(self, name: str, label: str) -> None:
        super().__init__(f"Query '{name}' already exists (while loading '{label}')")
        self.name = name
        self.label = label


class UnknownQueryError(QueryStoreError, LookupError):
    """Raised by `QueryStore.query` for a name that was never loaded."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Query '{name}' not found")
        self.name = name


class QueryStore:
    """Registry mapping query names to `ParsedQuery` values.

    Args:
        source: Object providing `open()` and `walk()`; defaults to the local file system.
        reserved_names: Names never treated as parameters (e.g. `DATETIME_FORMAT_TOKENS`).
    """

    def __init__(
            self,
            *,
            source: QuerySource | None = None,
            reserved_names: Collection[str] = frozenset(),
    ) -> None:
        self._source = source or FileSystemSource()
        self._reserved_names = frozenset(reserved_names)
        self._queries: dict[str, ParsedQuery] = {}
        self._lock = threading.Lock()

    def load_lines(self, label: str, lines: Iterable[str]) -> list[str]:
        """Scan, resolve and register every block in `lines`. Returns the new names."""

        blocks = scan_blocks(label, lines)
        parsed = {
            name: resolve(text, reserved_names=self._reserved_names)
            for name, text in blocks.items()
        }

        with self._lock:
            for name in parsed:
                if name in self._queries:
                    logger.warning("duplicate query name=%s source=%s", name, label)
                    raise DuplicateQueryError(name, label)
            self._queries.update(parsed)

        logger.info("loaded source=%s queries=%d", label, len(parsed))
        return list(parsed)

    def load_file(self, path: str) -> list[str]:
        """Load all blocks from a single file."""

        return self._load_from(self._source, path)

    def load_dir(self, root: str) -> list[str]:
        """Load every `.sql` file below `root` (recursively, in sorted order).

        Stops at the first failing file; files loaded before it stay registered.
        """

        return self._load_all(self._source, root)

    def load_package(self, package: str, directory: str = ".") -> list[str]:
        """Load every `.sql` resource in `directory` of an installed package."""

        return self._load_all(PackageResourceSource(package), directory)

    def _load_all(self, source: QuerySource, root: str) -> list[str]:
        names: list[str] = []
        for path in source.walk(root):
            if is_sql_path(path):
                names.extend(self._load_from(source, path))
        return names

    def _load_from(self, source: LineSource, path: str) -> list[str]:
        with source.open(path) as stream:
            try:
                lines = stream.readlines()
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceUnavailableError(path, str(exc)) from exc
        return self.load_lines(path, lines)

    def lookup(self, name: str) -> ParsedQuery | None:
        """Return the query registered under `name`, or `None`."""

        return self._queries.get(name)

    def query(self, name: str) -> ParsedQuery:
        """Return the query registered under `name`.

        Raises:
            UnknownQueryError: If no such query was loaded.
        """

        try:
            return self._queries[name]
        except KeyError:
            raise UnknownQueryError(name) from None

    @property
    def names(self) -> list[str]:
        """All registered query names, sorted."""

        return sorted(self._queries)

    def __contains__(self, name: object) -> bool:
        return name in self._queries

    def __len__(self) -> int:
        return len(self._queries)
