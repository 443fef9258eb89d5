"""tablegate CLI - Main entry point."""

import logging
import sys
from typing import Annotated

import typer

import tablegate
from tablegate.cli.context import CLIContext, get_database_url

app = typer.Typer(
    name="tablegate",
    help="tablegate CLI - schema-validated CRUD for SQLite tables",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    database: Annotated[
        str | None,
        typer.Option(
            "--database",
            "-d",
            envvar="TABLEGATE_URL",
            help="SQLite database URL or file path",
        ),
    ] = None,
    echo: Annotated[
        bool,
        typer.Option(
            "--echo",
            "-e",
            help="Echo SQL statements to console",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log generated SQL to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.obj = CLIContext(
        database_url=get_database_url(database),
        echo=echo,
        json_output=json_output,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"tablegate v{tablegate.__version__}")


from tablegate.cli.commands import data, schema  # noqa: E402

app.add_typer(schema.app, name="schema")
app.add_typer(data.app, name="data")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
