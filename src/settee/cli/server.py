import click
from rich.console import Console

from .output import print_json
from .state import current


@click.command()
def info():
    print_json(current().retrieve_info())


@click.command()
@click.option("--count", default=1)
def uuids(count: int):
    for uuid in current().retrieve_uuids(count):
        click.echo(uuid)


@click.command()
def stats():
    console = Console()
    with console.status("fetching stats..."):
        body = current().retrieve_stats()
    print_json(body, console)


@click.command()
@click.argument("section", required=False)
@click.argument("key", required=False)
def config(section: str | None, key: str | None):
    print_json(current().retrieve_config(section, key))
