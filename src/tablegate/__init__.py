"""tablegate - schema-validated CRUD for a single SQLite table.

The table's columns are discovered once when a gateway is created. Every
column reference is checked against them, and all values are bound as
parameters, so no SQL has to be written by hand.

Example:
    from tablegate import TableGateway

    with TableGateway.open("sqlite:///app.db", "users") as users:
        users.insert_row({"name": "Ada", "email": "ada@example.com"})
        users.update({"name": "Ada Lovelace"}, 1)
        users.set_separator("OR")
        rows = users.select_where({"name": "Ada Lovelace", "email": "x@example.com"})
        users.delete(1)
"""

from tablegate.core.connection import DatabaseConnection
from tablegate.core.gateway import TableGateway
from tablegate.core.types import (
    ColumnInfo,
    GatewayConfig,
    Separator,
    StoreProtocol,
    TableInfo,
    WriteResult,
)
from tablegate.exceptions import (
    ConnectionError,
    EmptyProjectionError,
    MalformedQueryError,
    QueryError,
    SchemaError,
    TableGateError,
    ValidationError,
)
from tablegate.schema import ColumnWhitelist

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "TableGateway",
    "DatabaseConnection",
    "ColumnWhitelist",
    # Types
    "Separator",
    "GatewayConfig",
    "ColumnInfo",
    "TableInfo",
    "WriteResult",
    "StoreProtocol",
    # Exceptions
    "TableGateError",
    "ConnectionError",
    "SchemaError",
    "ValidationError",
    "QueryError",
    "MalformedQueryError",
    "EmptyProjectionError",
]
