"""Custom exceptions for tablegate.

Every error carries a message plus a context dict so callers (and the CLI's
JSON mode) can report what went wrong and what was available instead.
"""

from __future__ import annotations

from typing import Any


class TableGateError(Exception):
    """Base exception for all tablegate errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConnectionError(TableGateError):
    """Failed to connect to the database."""

    pass


class SchemaError(TableGateError):
    """Schema introspection failed or the table cannot be used."""

    def __init__(
        self,
        message: str,
        table: str,
        available_columns: list[str] | None = None,
    ) -> None:
        context: dict[str, Any] = {"table": table}
        if available_columns is not None:
            context["available_columns"] = available_columns
        super().__init__(message, context)
        self.table = table
        self.available_columns = available_columns or []


class ValidationError(TableGateError):
    """A configuration value was rejected."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message, {"field_errors": field_errors or {}})
        self.field_errors = field_errors or {}


class QueryError(TableGateError):
    """Statement preparation or execution failed in the store."""

    def __init__(
        self,
        message: str,
        sql: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(context or {})
        if sql is not None:
            merged["sql"] = sql
        super().__init__(message, merged)
        self.sql = sql


class MalformedQueryError(QueryError):
    """A condition-requiring statement was issued with no usable conditions."""

    pass


class EmptyProjectionError(QueryError):
    """Every requested column was filtered out by the whitelist."""

    pass
