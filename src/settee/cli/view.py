import json

import click
from rich.console import Console
from rich.table import Table

from .state import current


@click.command()
@click.argument("db_name")
@click.argument("design")
@click.argument("view_name")
@click.option("--key", default=None, help="JSON encoded key")
@click.option("--limit", default=None, type=int)
@click.option("--include-docs", default=False, is_flag=True)
@click.option("--descending", default=False, is_flag=True)
def view(
    db_name: str,
    design: str,
    view_name: str,
    key: str | None,
    limit: int | None,
    include_docs: bool,
    descending: bool,
):
    options = {"include_docs": include_docs, "descending": descending}
    if key is not None:
        options["key"] = json.loads(key)
    if limit is not None:
        options["limit"] = limit

    result = current().database(db_name).call_view(design, view_name, options)

    table = Table(header_style="bold magenta", box=None, show_lines=True)
    table.add_column("id")
    table.add_column("key")
    table.add_column("value")
    for row in result:
        table.add_row(str(row.id), json.dumps(row.key), json.dumps(row.value))
    Console().print(table)
    click.echo(f"{len(result)} of {result.total_rows} rows")
