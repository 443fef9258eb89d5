"""CLI context management for database connections and shared state."""

import os
from dataclasses import dataclass, field

from tablegate import TableGateway

DEFAULT_DATABASE_URL = "sqlite:///./tablegate.db"


def get_database_url(url: str | None) -> str:
    """Resolve database URL from CLI arg, environment variable, or default.

    Priority:
    1. Explicit URL argument
    2. TABLEGATE_URL environment variable
    3. Default: sqlite:///./tablegate.db
    """
    if url:
        return url
    if env_url := os.getenv("TABLEGATE_URL"):
        return env_url
    return DEFAULT_DATABASE_URL


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Owns the gateway opened by a command and the output preferences.
    """

    database_url: str
    echo: bool
    json_output: bool
    _gateway: TableGateway | None = field(default=None, init=False, repr=False)

    def get_gateway(
        self,
        table: str,
        key_field: str = "id",
        separator: str = "AND",
        order: str | None = None,
    ) -> TableGateway:
        """Open a gateway on ``table`` (closing any previous one).

        Returns:
            TableGateway instance
        """
        self.close()
        self._gateway = TableGateway.open(
            self.database_url,
            table,
            key_field=key_field,
            separator=separator,
            order=order,
            echo=self.echo,
        )
        return self._gateway

    def close(self) -> None:
        """Close the gateway's connection if open."""
        if self._gateway is not None:
            self._gateway.close()
            self._gateway = None
