import click
from rich.console import Console
from rich.table import Table

from .output import print_json
from .state import current


@click.group()
def db():
    pass


@db.command()
@click.argument("name")
def create(name: str):
    db = current().create_database(name)
    click.echo(f"created db {db}")


@db.command()
@click.argument("name")
def get(name: str):
    print_json(current().retrieve_database(name).dehydrate())


@db.command()
def list():
    connection = current()
    console = Console()

    with console.status("fetching dbs..."):
        table = Table(header_style="bold magenta", box=None, show_lines=True)
        table.add_column("name")
        table.add_column("docs")
        table.add_column("update seq")
        for name in connection.list_databases():
            database = connection.retrieve_database(name)
            table.add_row(
                database.name,
                str(database.document_count),
                str(database.update_sequence),
            )
    console.print(table)


@db.command()
@click.argument("name")
def delete(name: str):
    current().delete_database(name)
    click.echo(f"deleted db {name}")
