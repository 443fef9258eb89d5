"""Column whitelist built from schema introspection.

Identifiers (table, columns, key field) are interpolated into SQL text, so
membership in the whitelist is the only thing standing between caller
input and the generated statement.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from tablegate.exceptions import QueryError, SchemaError

if TYPE_CHECKING:
    from tablegate.core.types import StoreProtocol

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_identifier(name: str) -> bool:
    """Check that a name is a plain, unquoted SQL identifier."""
    return bool(IDENTIFIER_PATTERN.match(name))


class ColumnWhitelist:
    """Mapping of column name to declared type for one table.

    Populated once by ``build`` and read-only afterwards.
    """

    def __init__(self, table: str, schema: Mapping[str, str]) -> None:
        self._table = table
        self._schema: Mapping[str, str] = MappingProxyType(dict(schema))

    @classmethod
    def build(cls, store: StoreProtocol, table: str) -> ColumnWhitelist:
        """Discover a table's columns through the store.

        Args:
            store: Store providing the ``query`` primitive
            table: Table to introspect

        Returns:
            Populated whitelist

        Raises:
            SchemaError: If the name is not an identifier, the metadata
                query fails, or the table has no columns (does not exist)
        """
        if not is_identifier(table):
            raise SchemaError(f"Invalid table name '{table}'.", table)

        try:
            rows = store.query(f'PRAGMA table_info("{table}")')
        except QueryError as e:
            raise SchemaError(f"Could not introspect table '{table}': {e.message}", table) from e

        if not rows:
            raise SchemaError(f"Table '{table}' does not exist.", table)

        schema = {str(row["name"]): str(row.get("type") or "") for row in rows}
        logger.info(f"Discovered {len(schema)} columns on '{table}': {', '.join(schema)}")
        return cls(table, schema)

    @property
    def table(self) -> str:
        return self._table

    @property
    def columns(self) -> list[str]:
        """Column names in table order."""
        return list(self._schema)

    @property
    def types(self) -> Mapping[str, str]:
        """Read-only column name to declared type mapping."""
        return self._schema

    def is_allowed(self, column: str) -> bool:
        """True iff the column exists on the table."""
        return column in self._schema

    def is_writable(self, column: str, key_field: str) -> bool:
        """True iff the column exists and is not the key field."""
        return self.is_allowed(column) and column != key_field

    def __contains__(self, column: object) -> bool:
        return column in self._schema

    def __iter__(self) -> Iterator[str]:
        return iter(self._schema)

    def __len__(self) -> int:
        return len(self._schema)

    def __repr__(self) -> str:
        return f"ColumnWhitelist(table={self._table!r}, columns={self.columns!r})"
