from typing import Iterator

from .connection import Connection
from .errors import UnknownConnectionError

DEFAULT = "default"


class ConnectionRegistry:
    """Named connections, owned by whoever creates the registry.

    Entries live until they are unregistered or the registry is cleared.
    """

    _connections: dict[str, Connection]

    def __init__(self):
        self._connections = {}

    def register(self, name: str, connection: Connection) -> Connection:
        self._connections[name] = connection
        return connection

    def unregister(self, name: str) -> Connection | None:
        return self._connections.pop(name, None)

    def get(self, name: str = DEFAULT) -> Connection:
        try:
            return self._connections[name]
        except KeyError:
            raise UnknownConnectionError(f'connection "{name}" not configured') from None

    def clear(self):
        self._connections.clear()

    def names(self) -> list[str]:
        return list(self._connections)

    def __contains__(self, name: object) -> bool:
        return name in self._connections

    def __iter__(self) -> Iterator[str]:
        return iter(self._connections)

    def __len__(self) -> int:
        return len(self._connections)
