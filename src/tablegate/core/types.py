"""Core types for tablegate.

Result models are pydantic so they serialize cleanly for the CLI's JSON mode.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol

from pydantic import BaseModel, Field, field_validator

Row = dict[str, Any]


class Separator(StrEnum):
    """Boolean operator joining equality conditions in a WHERE clause."""

    AND = "AND"
    OR = "OR"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid separator values."""
        return [s.value for s in cls]


class GatewayConfig(BaseModel):
    """Per-gateway configuration.

    Validated on assignment, so setters cannot leave it in a state that
    would interpolate an arbitrary operator into generated SQL.
    """

    table: str = Field(..., description="Table every statement targets")
    key_field: str = Field(default="id", description="Column identifying a row")
    separator: Separator = Field(default=Separator.AND, description="Condition join operator")
    order: str | None = Field(
        default=None, description="Verbatim ORDER BY fragment, e.g. 'id DESC'"
    )

    model_config = {"validate_assignment": True}

    @field_validator("separator", mode="before")
    @classmethod
    def _normalize_separator(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("order", mode="before")
    @classmethod
    def _normalize_order(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ColumnInfo(BaseModel):
    """A column discovered during schema introspection."""

    name: str
    type: str = ""
    is_key: bool = False


class TableInfo(BaseModel):
    """Description of the table a gateway is bound to."""

    table: str
    key_field: str
    separator: str
    order: str | None = None
    columns: list[ColumnInfo] = Field(default_factory=list)


class WriteResult(BaseModel):
    """Outcome of an INSERT, UPDATE or DELETE statement."""

    rows_affected: int = Field(default=0, description="Rows changed by the statement")
    last_row_id: int | None = Field(default=None, description="Rowid of the last insert")


class PreparedStatement(Protocol):
    """A statement handed out by a store, awaiting bindings."""

    sql: str

    def bind(self, name: str, value: Any) -> None: ...

    def execute(self) -> list[Row] | WriteResult: ...


class StoreProtocol(Protocol):
    """The two primitives the gateway needs from an embedded store."""

    def query(self, sql: str) -> list[Row]: ...

    def prepare(self, sql: str) -> PreparedStatement: ...
