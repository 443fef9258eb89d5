"""Data CRUD commands."""

from typing import Annotated

import typer

from tablegate.cli.context import CLIContext
from tablegate.cli.output import OutputFormatter
from tablegate.cli.parsing import parse_columns, parse_json_object, parse_row_id

app = typer.Typer(help="Select and modify table rows")

KeyFieldOption = Annotated[
    str,
    typer.Option("--key-field", "-k", help="Column identifying a row"),
]


@app.command("select")
def data_select(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table name")],
    where: Annotated[
        str | None,
        typer.Option("--where", "-w", help='Equality conditions as JSON, e.g. \'{"name": "Ada"}\''),
    ] = None,
    columns: Annotated[
        str | None,
        typer.Option("--columns", "-c", help="Comma-separated columns to return"),
    ] = None,
    use_or: Annotated[
        bool,
        typer.Option("--or", help="Join conditions with OR instead of AND"),
    ] = False,
    order: Annotated[
        str | None,
        typer.Option("--order", "-o", help='Sort order, e.g. "id DESC"'),
    ] = None,
    key_field: KeyFieldOption = "id",
) -> None:
    """Select rows from a table.

    Examples:

        tablegate data select users
        tablegate data select users --where '{"name": "Ada"}'
        tablegate data select users -c name,email --order "id DESC"
        tablegate data select users --or --where '{"name": "Ada", "email": "bob@example.com"}'
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        gateway = cli_ctx.get_gateway(
            table,
            key_field=key_field,
            separator="OR" if use_or else "AND",
            order=order,
        )
        conditions = parse_json_object(where, "--where") if where is not None else None
        selected = parse_columns(columns)

        if selected:
            rows = gateway.select_subset_where(selected, conditions)
        elif conditions is not None:
            rows = gateway.select_where(conditions)
        else:
            rows = gateway.select_all()

        formatter.print_rows(table, rows)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("insert")
def data_insert(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table name")],
    data_json: Annotated[str, typer.Argument(help="Row data as JSON object")],
    key_field: KeyFieldOption = "id",
) -> None:
    """Insert a row. Unknown columns and the key field are ignored.

    Examples:

        tablegate data insert users '{"name": "Ada", "email": "ada@example.com"}'
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        gateway = cli_ctx.get_gateway(table, key_field=key_field)
        result = gateway.insert_row(parse_json_object(data_json))
        formatter.print_success(
            "Inserted row",
            {"id": result.last_row_id, "rows_affected": result.rows_affected},
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("update")
def data_update(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table name")],
    row_id: Annotated[str, typer.Argument(help="Value of the key field")],
    data_json: Annotated[str, typer.Argument(help="Update data as JSON object")],
    key_field: KeyFieldOption = "id",
) -> None:
    """Update a row identified by its key field.

    Examples:

        tablegate data update users 1 '{"name": "Ada Lovelace"}'
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        gateway = cli_ctx.get_gateway(table, key_field=key_field)
        result = gateway.update(parse_json_object(data_json), parse_row_id(row_id))
        formatter.print_success(
            "Row updated",
            {"id": row_id, "rows_affected": result.rows_affected},
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("delete")
def data_delete(
    ctx: typer.Context,
    table: Annotated[str, typer.Argument(help="Table name")],
    row_id: Annotated[str, typer.Argument(help="Value of the key field")],
    key_field: KeyFieldOption = "id",
) -> None:
    """Delete a row identified by its key field.

    Examples:

        tablegate data delete users 1
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        gateway = cli_ctx.get_gateway(table, key_field=key_field)
        result = gateway.delete(parse_row_id(row_id))
        if result.rows_affected:
            formatter.print_success(
                f"Row deleted: {row_id}",
                {"rows_affected": result.rows_affected},
            )
        else:
            formatter.print_error(Exception(f"No row with {key_field} = {row_id}"))
            raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
