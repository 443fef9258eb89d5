"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tablegate.core.types import TableInfo
from tablegate.exceptions import TableGateError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_rows(self, title: str, rows: list[dict[str, Any]]) -> None:
        """Print rows as a Rich table or JSON array.

        Args:
            title: Table title
            rows: Row mappings; columns are taken from the first row
        """
        if self.json_mode:
            print(json.dumps(rows, default=str, indent=2))
            return

        if not rows:
            console.print(f"No rows in {title}", style="dim")
            return

        table = Table(title=title, show_header=True, header_style="bold magenta")
        columns = list(rows[0])
        for col in columns:
            table.add_column(col)
        for row in rows:
            table.add_row(*["" if row.get(col) is None else str(row.get(col)) for col in columns])
        console.print(table)

    def print_table_info(self, info: TableInfo) -> None:
        """Print the discovered columns of a table."""
        if self.json_mode:
            print(json.dumps(info.model_dump(), default=str, indent=2))
            return

        console.print(f"\n[bold]Table:[/bold] {info.table}")
        console.print(f"Key field: {info.key_field}")
        columns_table = Table(show_header=True, header_style="bold cyan")
        columns_table.add_column("Name")
        columns_table.add_column("Type")
        columns_table.add_column("Key")
        for column in info.columns:
            columns_table.add_row(column.name, column.type, "✓" if column.is_key else "")
        console.print(columns_table)

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message.

        Args:
            message: Success message
            details: Optional details to display
        """
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, TableGateError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            if isinstance(error, TableGateError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)
