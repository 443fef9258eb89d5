"""Shared test fixtures for tablegate."""

from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tablegate import ColumnWhitelist, DatabaseConnection, GatewayConfig, TableGateway

USERS_DDL = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    email VARCHAR(255)
)
"""


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """SQLite file URL in a per-test temporary directory."""
    return f"sqlite:///{tmp_path / 'tablegate.db'}"


@pytest.fixture
def connection(db_url: str) -> Generator[DatabaseConnection, None, None]:
    """A connection to a database holding an empty ``users`` table."""
    conn = DatabaseConnection(db_url)
    conn.execute(USERS_DDL)
    yield conn
    conn.close()


@pytest.fixture
def spy_store(connection: DatabaseConnection) -> MagicMock:
    """The real connection wrapped so calls to query/prepare can be counted."""
    return MagicMock(wraps=connection)


@pytest.fixture
def users(connection: DatabaseConnection) -> TableGateway:
    """Gateway on the ``users`` table."""
    return TableGateway(connection, "users")


@pytest.fixture
def whitelist() -> ColumnWhitelist:
    """Whitelist for users(id, name, email) without touching a database."""
    return ColumnWhitelist("users", {"id": "INTEGER", "name": "TEXT", "email": "VARCHAR(255)"})


@pytest.fixture
def config() -> GatewayConfig:
    """Default configuration for the users table."""
    return GatewayConfig(table="users", key_field="id")


@pytest.fixture
def seed() -> Callable[..., None]:
    """Insert (name, email) rows through a gateway."""

    def _seed(gateway: TableGateway, *rows: tuple[str, str]) -> None:
        for name, email in rows:
            gateway.insert_row({"name": name, "email": email})

    return _seed
