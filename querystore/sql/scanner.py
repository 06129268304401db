"""Named block scanner.

A `.sql` file holds several statements, each introduced by a header comment:

    -- name: get_user
    SELECT * FROM users WHERE id = :id

The scanner splits such text into `{name: raw_text}` in a single pass. It never fails: lines
before the first header are dropped, and a malformed header is kept as ordinary content.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"--\s*name:\s*(?P<name>\S+)")


@dataclass
class _OpenBlock:
    name: str
    lines: list[str] = field(default_factory=list)

    def text(self) -> str:
        return "\n".join(self.lines)


def header_name(line: str) -> str | None:
    """Return the block name declared by `line`, or `None` if it is not a header."""

    # The whole line must be the header: `-- name: q1 extra words` stays a content line.
    match = _HEADER_RE.fullmatch(line.strip())
    if match is None:
        return None
    return match.group("name")


def _strip_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def scan_blocks(label: str, lines: Iterable[str]) -> dict[str, str]:
    """Split `lines` into named query blocks.

    Content lines are joined with `\\n` exactly as read (no trimming, no trailing newline). A name
    repeated within the same input keeps the later block.
    """

    blocks: dict[str, str] = {}
    current: _OpenBlock | None = None

    for raw_line in lines:
        line = _strip_line_ending(raw_line)
        name = header_name(line)

        if name is None:
            if current is not None:
                current.lines.append(line)
            continue

        if current is not None:
            blocks[current.name] = current.text()
        current = _OpenBlock(name=name)

    if current is not None:
        blocks[current.name] = current.text()

    logger.debug("scanned source=%s blocks=%d", label, len(blocks))
    return blocks
