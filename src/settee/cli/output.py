import json
from typing import Any

from rich.console import Console
from rich.syntax import Syntax


def print_json(data: Any, console: Console | None = None):
    console = console or Console()
    console.print(Syntax(json.dumps(data, indent=2), "json"))
