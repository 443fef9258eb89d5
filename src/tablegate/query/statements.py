"""SQL statement generation.

Identifiers reach the SQL text only after passing the whitelist; values
are always bound. The ORDER BY fragment is the one exception: it is
appended verbatim and callers are trusted to supply ``"<column> ASC|DESC"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tablegate.exceptions import MalformedQueryError
from tablegate.query.conditions import Binding, ConditionBuilder
from tablegate.query.projection import ColumnProjector

if TYPE_CHECKING:
    from tablegate.core.types import GatewayConfig
    from tablegate.schema.whitelist import ColumnWhitelist

# Placeholder for the row identifier in UPDATE and DELETE.
ID_PARAM = "id"


@dataclass(frozen=True)
class Statement:
    """Generated SQL text and its ordered bindings."""

    sql: str
    bindings: list[Binding] = field(default_factory=list)
    empty_conditions: bool = False
    """True when a WHERE group was emitted with no usable condition."""

    empty_projection: bool = False
    """True when every requested column was filtered out."""

    @property
    def params(self) -> dict[str, Any]:
        """Bindings keyed by name without the leading colon."""
        return {name.lstrip(":"): value for name, value in self.bindings}


class StatementFactory:
    """Composes conditions and projections into full statements.

    Reads the config on every call, so setter changes apply to the next
    statement.
    """

    def __init__(self, whitelist: ColumnWhitelist, config: GatewayConfig) -> None:
        self._config = config
        self._conditions = ConditionBuilder(whitelist)
        self._projector = ColumnProjector(whitelist)

    def _order_clause(self) -> str:
        order = self._config.order
        return f" ORDER BY {order}" if order else ""

    def select_all(self) -> Statement:
        return Statement(f"SELECT * FROM {self._config.table}{self._order_clause()}")

    def select_where(self, conditions: Mapping[str, Any]) -> Statement:
        fragments, bindings = self._conditions.build_equality(conditions)
        where = ConditionBuilder.join(fragments, self._config.separator)
        sql = f"SELECT * FROM {self._config.table} WHERE {where}{self._order_clause()}"
        return Statement(sql, bindings, empty_conditions=not fragments)

    def select_subset_where(
        self,
        columns: Sequence[str],
        conditions: Mapping[str, Any] | None = None,
    ) -> Statement:
        """SELECT a column subset, with a WHERE clause only if conditions were given.

        Conditions that were supplied but all filtered out still emit an
        empty group, so they fail instead of silently selecting every row.
        """
        projected = self._projector.project(columns, self._config.key_field, writable=False)
        sql = f"SELECT {', '.join(projected)} FROM {self._config.table}"
        bindings: list[Binding] = []
        empty_conditions = False
        if conditions:
            fragments, bindings = self._conditions.build_equality(conditions)
            sql += f" WHERE {ConditionBuilder.join(fragments, self._config.separator)}"
            empty_conditions = not fragments
        sql += self._order_clause()
        return Statement(
            sql,
            bindings,
            empty_conditions=empty_conditions,
            empty_projection=not projected,
        )

    def insert(self, data: Mapping[str, Any]) -> Statement:
        columns = self._projector.project(data.keys(), self._config.key_field)
        placeholders = ",".join(f":{c}" for c in columns)
        sql = f"INSERT INTO {self._config.table} ({','.join(columns)}) VALUES ({placeholders})"
        bindings = [(f":{c}", data[c]) for c in columns]
        return Statement(sql, bindings, empty_projection=not columns)

    def update(self, data: Mapping[str, Any], row_id: Any) -> Statement:
        """UPDATE writable columns of the row whose key field equals ``row_id``.

        Raises:
            MalformedQueryError: If a writable column is named like the
                identifier placeholder
        """
        columns = self._projector.project(data.keys(), self._config.key_field)
        if ID_PARAM in columns:
            raise MalformedQueryError(
                f"Column '{ID_PARAM}' collides with the identifier placeholder "
                f"when the key field is '{self._config.key_field}'.",
                context={"table": self._config.table, "key_field": self._config.key_field},
            )
        assignments = ", ".join(f"{c} = :{c}" for c in columns)
        sql = (
            f"UPDATE {self._config.table} SET {assignments} "
            f"WHERE {self._config.key_field} = :{ID_PARAM}"
        )
        bindings = [(f":{c}", data[c]) for c in columns]
        bindings.append((f":{ID_PARAM}", row_id))
        return Statement(sql, bindings, empty_projection=not columns)

    def delete(self, row_id: Any) -> Statement:
        sql = f"DELETE FROM {self._config.table} WHERE ({self._config.key_field} = :{ID_PARAM})"
        return Statement(sql, [(f":{ID_PARAM}", row_id)])
