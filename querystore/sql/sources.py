"""Line sources for query files.

The store never touches the file system directly. It is handed a source object offering two
capabilities: `open(path)` returns a readable text stream, and `walk(root)` lists the logical
paths below a root. Files on disk and resources bundled inside an installed package are supported.
"""

from __future__ import annotations

from collections.abc import Iterable
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Protocol, TextIO, runtime_checkable

SQL_SUFFIX = ".sql"


class SourceUnavailableError(OSError):
    """Raised when a logical path cannot be opened, read, or listed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path


@runtime_checkable
class LineSource(Protocol):
    """Opens logical paths as text streams."""

    def open(self, path: str) -> TextIO: ...


@runtime_checkable
class PathWalker(Protocol):
    """Lists logical paths below a root."""

    def walk(self, root: str) -> Iterable[str]: ...


class QuerySource(LineSource, PathWalker, Protocol):
    """A source offering both capabilities."""


def is_sql_path(path: str) -> bool:
    """Return whether `path` names a `.sql` file (suffix compared case-insensitively)."""

    return path.lower().endswith(SQL_SUFFIX)


class FileSystemSource:
    """Reads query files from the local file system."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def open(self, path: str) -> TextIO:
        try:
            return open(path, encoding=self.encoding, newline="")
        except OSError as exc:
            raise SourceUnavailableError(path, exc.strerror or str(exc)) from exc

    def walk(self, root: str) -> Iterable[str]:
        base = Path(root)
        if not base.is_dir():
            raise SourceUnavailableError(root, "directory does not exist")
        return [str(p) for p in sorted(base.rglob("*")) if p.is_file()]


class PackageResourceSource:
    """Reads query files bundled as package data (`importlib.resources`).

    Logical paths are POSIX-style and relative to the package root, e.g. `"queries/users.sql"`.
    """

    def __init__(self, package: str, encoding: str = "utf-8") -> None:
        self.package = package
        self.encoding = encoding

    def _resource(self, path: str) -> Traversable:
        try:
            node = resources.files(self.package)
        except ModuleNotFoundError as exc:
            raise SourceUnavailableError(path, f"package '{self.package}' not found") from exc
        for part in PurePosixPath(path).parts:
            if part not in ("", "."):
                node = node.joinpath(part)
        return node

    def open(self, path: str) -> TextIO:
        resource = self._resource(path)
        try:
            return resource.open("r", encoding=self.encoding, newline="")
        except OSError as exc:
            raise SourceUnavailableError(path, exc.strerror or str(exc)) from exc

    def walk(self, root: str) -> Iterable[str]:
        directory = self._resource(root)
        if not directory.is_dir():
            raise SourceUnavailableError(root, f"not a directory in package '{self.package}'")
        prefix = PurePosixPath(root)
        return [
            str(prefix / entry.name)
            for entry in sorted(directory.iterdir(), key=lambda e: e.name)
            if entry.is_file()
        ]
