"""Core components for tablegate."""

from tablegate.core.connection import BoundStatement, DatabaseConnection
from tablegate.core.gateway import TableGateway
from tablegate.core.types import (
    ColumnInfo,
    GatewayConfig,
    Separator,
    TableInfo,
    WriteResult,
)

__all__ = [
    "BoundStatement",
    "DatabaseConnection",
    "TableGateway",
    "Separator",
    "GatewayConfig",
    "ColumnInfo",
    "TableInfo",
    "WriteResult",
]
