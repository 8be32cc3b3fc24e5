import json

import click
from rich.console import Console
from rich.syntax import Syntax

from settee.errors import ServerError, SetteeError
from settee.log import setup

from .db import db
from .doc import doc
from .server import config, info, stats, uuids
from .state import configure
from .view import view


@click.group()
@click.option("--url", default=None, help="server URL, defaults to $SETTEE_URL")
@click.option("--adapter", default=None, type=click.Choice(["requests", "httpx"]))
@click.option("-v", "--verbose", default=False, is_flag=True)
def main(verbose: bool, url: str | None, adapter: str | None):
    setup(verbose)
    configure(url, adapter)


main.add_command(info)
main.add_command(uuids)
main.add_command(stats)
main.add_command(config)
main.add_command(db)
main.add_command(doc)
main.add_command(view)


def run():
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        exit(e.exit_code)
    except SetteeError as e:
        click.echo(f"error: {e}")
        if isinstance(e, ServerError):
            Console().print(Syntax(json.dumps(e.payload(), indent=2), "json"))
        exit(1)
