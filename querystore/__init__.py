"""Named SQL query files for PostgreSQL.

Queries live in `.sql` files as named blocks (`-- name: get_user`) using psql-style `:name`
variables. They are rewritten to positional `$n` placeholders and kept in a `QueryStore`.
"""

from querystore.sql.resolver import DATETIME_FORMAT_TOKENS, ParsedQuery, resolve
from querystore.sql.scanner import scan_blocks
from querystore.sql.store import DuplicateQueryError, QueryStore, UnknownQueryError

__all__ = [
    "DATETIME_FORMAT_TOKENS",
    "DuplicateQueryError",
    "ParsedQuery",
    "QueryStore",
    "UnknownQueryError",
    "resolve",
    "scan_blocks",
]
