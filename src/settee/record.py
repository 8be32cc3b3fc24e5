from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .connection import Connection


class Record:
    """Something hydrated from a decoded server response.

    Hydration merges: keys present in the source overwrite, everything else
    already on the record is kept.
    """

    connection: "Connection"
    _data: dict[str, Any]

    def __init__(self, connection: "Connection", data: Mapping[str, Any] | None = None):
        self.connection = connection
        self._data = {}
        if data is not None:
            self.hydrate(data)

    def hydrate(self, source: Mapping[str, Any]) -> None:
        self._data.update(source)

    def dehydrate(self) -> dict[str, Any]:
        return dict(self._data)
