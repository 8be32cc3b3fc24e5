import json

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from .output import print_json
from .state import current


@click.group()
def doc():
    pass


@doc.command()
@click.argument("db_name")
@click.argument("body")
def create(db_name: str, body: str):
    db = current().database(db_name)
    doc = db.new_document(json.loads(body))
    doc.save()
    print_json(doc.dehydrate())


@doc.command()
@click.argument("db_name")
@click.argument("id")
@click.option("--rev", default=None)
def get(db_name: str, id: str, rev: str | None):
    print_json(current().database(db_name).retrieve_document(id, rev).dehydrate())


@doc.command()
@click.argument("db_name")
@click.option("--include-docs", default=False, is_flag=True)
def list(db_name: str, include_docs: bool):
    result = current().database(db_name).list_documents({"include_docs": include_docs})

    table = Table(header_style="bold magenta", box=None, show_lines=True)
    table.add_column("id")
    table.add_column("rev")
    if include_docs:
        table.add_column("body")

    for row in result:
        cells = [row.id, row.rev]
        if include_docs and row.document is not None:
            cells.append(Syntax(json.dumps(row.document.dehydrate(), indent=2), "json"))
        table.add_row(*cells)

    Console().print(table)
