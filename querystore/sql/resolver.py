"""Named-to-positional parameter resolution.

Query files use psql-style named variables (`:user_id`, `:'user_id'`, `:"user_id"`), while
PostgreSQL's extended protocol expects positional `$1..$N` placeholders. `resolve()` rewrites the
text and records which name owns which ordinal; `ParsedQuery.prepare()` turns a name->value
mapping back into the positional argument list.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Date/time format tokens such as `to_char(ts, 'HH24:MI:SS')` look like named variables.
DATETIME_FORMAT_TOKENS: frozenset[str] = frozenset({"MI", "SS"})

# A colon that is not part of a `::type` cast, optional quote decoration, then the identifier.
_MARKER_RE = re.compile(r"""(?<=[^:]):['"]?(?P<name>[A-Za-z][A-Za-z0-9_]*)['"]?""")
# Same shape for rewriting, but also matches at offset 0 once discovery has assigned the name.
_REWRITE_RE = re.compile(r"""(?<!:):['"]?(?P<name>[A-Za-z][A-Za-z0-9_]*)['"]?""")


class MissingArgumentsError(ValueError):
    """Raised by `ParsedQuery.prepare_strict` when some parameters have no value."""

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Missing query arguments: {', '.join(names)}")
        self.names = names


def is_reserved_name(name: str, reserved_names: Collection[str] = DATETIME_FORMAT_TOKENS) -> bool:
    """Return whether `name` is excluded from parameter discovery."""

    return name in reserved_names


@dataclass(frozen=True)
class ParsedQuery:
    """A query rewritten to positional placeholders plus its name->ordinal mapping."""

    raw: str
    positional_text: str
    ordinal_map: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ordinal_map", MappingProxyType(dict(self.ordinal_map)))

    def __hash__(self) -> int:
        return hash((self.raw, self.positional_text, tuple(sorted(self.ordinal_map.items()))))

    @property
    def names(self) -> list[str]:
        """Parameter names in ordinal order."""

        return sorted(self.ordinal_map, key=self.ordinal_map.__getitem__)

    def prepare(self, args_by_name: Mapping[str, Any]) -> list[Any]:
        """Build the positional argument list for `positional_text`.

        Slot `i - 1` holds the value for the parameter with ordinal `i`. Names missing from
        `args_by_name` become `None` (SQL `NULL`); unknown keys are ignored.
        """

        args: list[Any] = [None] * len(self.ordinal_map)
        for name, ordinal in self.ordinal_map.items():
            args[ordinal - 1] = args_by_name.get(name)
        return args

    def missing(self, args_by_name: Mapping[str, Any]) -> list[str]:
        """Return parameter names (ordinal order) that have no entry in `args_by_name`."""

        return [name for name in self.names if name not in args_by_name]

    def prepare_strict(self, args_by_name: Mapping[str, Any]) -> list[Any]:
        """Like `prepare`, but raise `MissingArgumentsError` instead of filling in `None`."""

        missing = self.missing(args_by_name)
        if missing:
            raise MissingArgumentsError(missing)
        return self.prepare(args_by_name)


def _assign_ordinals(raw: str, reserved_names: Collection[str]) -> dict[str, int]:
    ordinals: dict[str, int] = {}
    for match in _MARKER_RE.finditer(raw):
        name = match.group("name")
        if is_reserved_name(name, reserved_names) or name in ordinals:
            continue
        ordinals[name] = len(ordinals) + 1
    return ordinals


def resolve(raw: str, *, reserved_names: Collection[str] = frozenset()) -> ParsedQuery:
    """Parse `raw` into a `ParsedQuery`.

    Ordinals follow first occurrence, left to right. Names listed in `reserved_names` are left in
    place untouched; pass `DATETIME_FORMAT_TOKENS` to protect `MI`/`SS` format strings.
    """

    ordinals = _assign_ordinals(raw, reserved_names)

    def _substitute(match: re.Match[str]) -> str:
        ordinal = ordinals.get(match.group("name"))
        if ordinal is None:
            return match.group(0)
        return f"${ordinal}"

    positional_text = _REWRITE_RE.sub(_substitute, raw)
    return ParsedQuery(raw=raw, positional_text=positional_text, ordinal_map=ordinals)
