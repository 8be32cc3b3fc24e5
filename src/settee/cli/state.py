from settee.connection import Connection, connect
from settee.registry import ConnectionRegistry

registry = ConnectionRegistry()


def configure(url: str | None, adapter: str | None):
    registry.register("default", connect(url, adapter))


def current() -> Connection:
    return registry.get()
