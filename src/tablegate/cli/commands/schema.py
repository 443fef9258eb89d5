"""Schema inspection commands."""

from typing import Annotated

import typer

from tablegate.cli.context import CLIContext
from tablegate.cli.output import OutputFormatter

app = typer.Typer(help="Inspect table schemas")


@app.command("describe")
def schema_describe(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table name")],
    key_field: Annotated[
        str,
        typer.Option("--key-field", "-k", help="Column identifying a row"),
    ] = "id",
) -> None:
    """Show the columns discovered on a table.

    Examples:

        tablegate schema describe users
        tablegate --json schema describe users
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        gateway = cli_ctx.get_gateway(table, key_field=key_field)
        formatter.print_table_info(gateway.describe())
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
