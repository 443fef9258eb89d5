"""Database connection management for tablegate.

Provides the embedded-store primitives the gateway is built on:
``query`` for plain SQL and ``prepare``/``bind``/``execute`` for
parameterized statements.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from tablegate.core.types import Row, WriteResult
from tablegate.exceptions import ConnectionError, QueryError

if TYPE_CHECKING:
    from sqlalchemy.engine.url import URL

logger = logging.getLogger(__name__)


def _normalize_sqlite_url(url: str) -> str:
    """Turn a bare filesystem path into a SQLite URL.

    Supports:
    - sqlite:///path/to/db.sqlite
    - sqlite:///:memory:
    - path/to/db.sqlite (converted to sqlite:///path/to/db.sqlite)
    """
    if "://" in url:
        return url
    if url == ":memory:":
        return "sqlite:///:memory:"
    return f"sqlite:///{url}"


class BoundStatement:
    """A prepared statement: SQL text plus the values bound to it.

    Names are stored without the leading colon; ``bind(":name", v)`` and
    ``bind("name", v)`` are equivalent.
    """

    def __init__(self, connection: DatabaseConnection, sql: str) -> None:
        self._connection = connection
        self.sql = sql
        self._params: dict[str, Any] = {}

    @property
    def params(self) -> dict[str, Any]:
        """Bound parameter values, keyed by name without the colon."""
        return dict(self._params)

    def bind(self, name: str, value: Any) -> None:
        """Bind a value to a named placeholder."""
        self._params[name.lstrip(":")] = value

    def execute(self) -> list[Row] | WriteResult:
        """Execute the statement.

        Returns:
            All rows as mappings for statements that produce rows,
            otherwise a WriteResult.

        Raises:
            QueryError: If the store rejects or fails the statement
        """
        return self._connection.execute(self.sql, self._params)


class DatabaseConnection:
    """Manages the SQLite connection for tablegate."""

    SUPPORTED_DIALECTS = ("sqlite",)

    def __init__(self, url: str | URL, echo: bool = False) -> None:
        """Initialize database connection.

        Args:
            url: SQLite URL ("sqlite:///path/to/db.sqlite", "sqlite:///:memory:")
                 or a plain file path
            echo: Whether to echo SQL statements (for debugging)
        """
        self._url = _normalize_sqlite_url(str(url))
        self._echo = echo
        self._engine: Engine | None = None

    @property
    def url(self) -> str:
        """The normalized database URL."""
        return self._url

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine."""
        if self._engine is None:
            try:
                connect_args = {}
                if self._url.startswith("sqlite"):
                    connect_args["check_same_thread"] = False

                engine = create_engine(
                    self._url,
                    echo=self._echo,
                    connect_args=connect_args,
                )

                if engine.dialect.name not in self.SUPPORTED_DIALECTS:
                    engine.dispose()
                    raise ConnectionError(
                        f"Unsupported database dialect: {engine.dialect.name}. "
                        f"Supported: {', '.join(self.SUPPORTED_DIALECTS)}"
                    )

                with engine.connect() as conn:
                    conn.execute(text("PRAGMA foreign_keys = ON"))
                    conn.commit()

                self._engine = engine
                logger.info(f"Opened database {self._url}")
            except Exception as e:
                if isinstance(e, ConnectionError):
                    raise
                raise ConnectionError(f"Failed to create database engine: {e}") from e
        return self._engine

    def query(self, sql: str) -> list[Row]:
        """Run SQL without bindings and return every row.

        Raises:
            QueryError: If the statement cannot be executed
        """
        result = self.execute(sql)
        if isinstance(result, WriteResult):
            return []
        return result

    def prepare(self, sql: str) -> BoundStatement:
        """Prepare SQL for binding and execution."""
        return BoundStatement(self, sql)

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> list[Row] | WriteResult:
        """Execute one statement in its own short transaction.

        Args:
            sql: SQL text with ``:name`` placeholders
            params: Values for the placeholders

        Returns:
            Rows as mappings, or a WriteResult for statements without rows

        Raises:
            QueryError: If the store rejects or fails the statement
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), params or {})
                if result.returns_rows:
                    return [dict(row) for row in result.mappings().all()]
                return WriteResult(
                    rows_affected=max(result.rowcount, 0),
                    last_row_id=result.lastrowid,
                )
        except SQLAlchemyError as e:
            raise QueryError(f"Statement failed: {e}", sql=sql) from e

    def test_connection(self) -> bool:
        """Test if the database connection works.

        Raises:
            ConnectionError: If connection test fails
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            raise ConnectionError(f"Database connection test failed: {e}") from e

    def close(self) -> None:
        """Dispose of the engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info(f"Closed database {self._url}")

    def __enter__(self) -> DatabaseConnection:
        """Context manager entry."""
        self.test_connection()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
