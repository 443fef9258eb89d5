"""TableGateway: schema-validated CRUD for a single table."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import pydantic

from tablegate.core.connection import DatabaseConnection
from tablegate.core.types import (
    ColumnInfo,
    GatewayConfig,
    Row,
    Separator,
    StoreProtocol,
    TableInfo,
    WriteResult,
)
from tablegate.data.results import ResultAccumulator
from tablegate.exceptions import (
    EmptyProjectionError,
    MalformedQueryError,
    QueryError,
    SchemaError,
    ValidationError,
)
from tablegate.query.statements import Statement, StatementFactory
from tablegate.schema.whitelist import ColumnWhitelist

logger = logging.getLogger(__name__)


class TableGateway:
    """Schema-aware data access for one table.

    The table's columns are discovered once at construction and every
    column reference is checked against them. Unknown columns in
    conditions or data are dropped silently; values are always bound.

    Example:
        with TableGateway.open("sqlite:///app.db", "users") as users:
            users.insert_row({"name": "Ada", "email": "ada@example.com"})
            users.set_order("id DESC")
            rows = users.select_where({"name": "Ada"})

    Select results are buffered per instance and never reset: a second
    ``select_all`` returns the same list without querying again, and
    ``select_where`` appends to the rows of earlier calls.
    """

    def __init__(
        self,
        store: StoreProtocol,
        table: str,
        key_field: str = "id",
        separator: Separator | str = Separator.AND,
        order: str | None = None,
    ) -> None:
        """Initialize the gateway and introspect the table.

        Args:
            store: Anything providing ``query`` and ``prepare``
            table: Table to operate on
            key_field: Column identifying a row for update/delete
            separator: "AND" or "OR", joining conditions
            order: Optional ORDER BY fragment, e.g. "id DESC"

        Raises:
            SchemaError: If the table cannot be introspected or lacks the key field
            ValidationError: If the separator is not AND/OR
        """
        self._store = store
        self._owned_connection: DatabaseConnection | None = None
        self._config = self._make_config(table, key_field, separator, order)
        self._whitelist = ColumnWhitelist.build(store, table)
        if not self._whitelist.is_allowed(key_field):
            raise SchemaError(
                f"Key field '{key_field}' is not a column of '{table}'.",
                table,
                self._whitelist.columns,
            )
        self._statements = StatementFactory(self._whitelist, self._config)
        self._results = ResultAccumulator()

    @classmethod
    def open(
        cls,
        url: str,
        table: str,
        key_field: str = "id",
        separator: Separator | str = Separator.AND,
        order: str | None = None,
        echo: bool = False,
    ) -> TableGateway:
        """Open a SQLite database and bind a gateway to one of its tables.

        The gateway owns the connection and closes it in ``close()``.
        """
        connection = DatabaseConnection(url, echo=echo)
        try:
            gateway = cls(connection, table, key_field, separator, order)
        except Exception:
            connection.close()
            raise
        gateway._owned_connection = connection
        return gateway

    @staticmethod
    def _make_config(
        table: str,
        key_field: str,
        separator: Separator | str,
        order: str | None,
    ) -> GatewayConfig:
        try:
            return GatewayConfig(
                table=table, key_field=key_field, separator=separator, order=order
            )
        except pydantic.ValidationError as e:
            raise _config_error(e) from e

    def close(self) -> None:
        """Close the connection if this gateway opened it."""
        if self._owned_connection is not None:
            self._owned_connection.close()
            self._owned_connection = None

    def __enter__(self) -> TableGateway:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    # === Configuration ===

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def whitelist(self) -> ColumnWhitelist:
        return self._whitelist

    def set_separator(self, separator: Separator | str) -> None:
        """Use "AND" or "OR" between conditions from now on.

        Raises:
            ValidationError: For any other operator
        """
        try:
            self._config.separator = separator  # type: ignore[assignment]
        except pydantic.ValidationError as e:
            raise _config_error(e) from e

    def set_order(self, order: str | None) -> None:
        """Sort subsequent selects by ``order`` (without "ORDER BY").

        The fragment is appended verbatim; pass None or "" to clear it.
        """
        self._config.order = order

    def describe(self) -> TableInfo:
        """Describe the bound table and current configuration."""
        return TableInfo(
            table=self._config.table,
            key_field=self._config.key_field,
            separator=self._config.separator.value,
            order=self._config.order,
            columns=[
                ColumnInfo(name=name, type=col_type, is_key=name == self._config.key_field)
                for name, col_type in self._whitelist.types.items()
            ],
        )

    # === Selects ===

    def select_all(self) -> list[Row]:
        """Return every row, cached after the first non-empty fetch."""
        return self._results.accumulate_all(lambda: self._query(self._statements.select_all()))

    def select_where(self, conditions: Mapping[str, Any]) -> list[Row]:
        """Return rows matching the equality conditions, appended to earlier results.

        Raises:
            MalformedQueryError: If no condition names a known column
        """
        rows = self._rows(self._statements.select_where(conditions))
        return self._results.accumulate_where(rows)

    def select_subset_where(
        self,
        columns: Sequence[str],
        conditions: Mapping[str, Any] | None = None,
    ) -> list[Row]:
        """Return only the known ``columns`` of matching rows.

        Results are not buffered. Without conditions every row is returned.

        Raises:
            EmptyProjectionError: If no requested column is known
            MalformedQueryError: If conditions were given but none is known
        """
        return self._rows(self._statements.select_subset_where(columns, conditions))

    # === Writes ===

    def insert_row(self, data: Mapping[str, Any]) -> WriteResult:
        """Insert one row from the writable columns of ``data``.

        Raises:
            EmptyProjectionError: If no writable column is left
        """
        return self._write(self._statements.insert(data))

    def update(self, data: Mapping[str, Any], row_id: Any) -> WriteResult:
        """Update the writable columns of the row whose key field is ``row_id``.

        Raises:
            EmptyProjectionError: If no writable column is left
        """
        return self._write(self._statements.update(data, row_id))

    def delete(self, row_id: Any) -> WriteResult:
        """Delete the row whose key field is ``row_id``."""
        return self._write(self._statements.delete(row_id))

    # === Execution ===

    def _query(self, statement: Statement) -> list[Row]:
        logger.debug(f"query: {statement.sql}")
        try:
            return self._store.query(statement.sql)
        except QueryError as e:
            classified = _classify(statement, e)
            if classified is e:
                raise
            raise classified from e

    def _execute(self, statement: Statement) -> list[Row] | WriteResult:
        logger.debug(f"execute: {statement.sql} [{', '.join(n for n, _ in statement.bindings)}]")
        try:
            prepared = self._store.prepare(statement.sql)
            for name, value in statement.bindings:
                prepared.bind(name, value)
            return prepared.execute()
        except QueryError as e:
            classified = _classify(statement, e)
            if classified is e:
                raise
            raise classified from e

    def _rows(self, statement: Statement) -> list[Row]:
        result = self._execute(statement)
        if isinstance(result, WriteResult):
            return []
        return result

    def _write(self, statement: Statement) -> WriteResult:
        result = self._execute(statement)
        if isinstance(result, WriteResult):
            return result
        return WriteResult()


def _classify(statement: Statement, error: QueryError) -> QueryError:
    """Name the store failure after the empty clause that caused it."""
    if isinstance(error, (MalformedQueryError, EmptyProjectionError)):
        return error
    if statement.empty_projection:
        return EmptyProjectionError(
            f"No known columns to project; the store rejected the statement: {error.message}",
            sql=statement.sql,
        )
    if statement.empty_conditions:
        return MalformedQueryError(
            f"No known condition columns; the store rejected the statement: {error.message}",
            sql=statement.sql,
        )
    return error


def _config_error(error: pydantic.ValidationError) -> ValidationError:
    field_errors = {
        ".".join(str(part) for part in err["loc"]): err["msg"] for err in error.errors()
    }
    message = "Invalid gateway configuration."
    if "separator" in field_errors:
        message += f" Separator must be one of: {', '.join(Separator.values())}"
    return ValidationError(message, field_errors)
