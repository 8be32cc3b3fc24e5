from typing import TYPE_CHECKING, Any, Iterator, Mapping, MutableMapping

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from .db import Database
    from .types import OkResponse

ID_FIELD = "_id"
REVISION_FIELD = "_rev"


class Document(MutableMapping[str, Any]):
    """A schemaless JSON document.

    Regular fields live in an ordered dict. The reserved `_id` and `_rev`
    fields are kept apart, as the `id` and `rev` attributes, but can be read
    and written through the mapping interface like any other key.

    Every write marks the document dirty. `save()` sends the whole document
    back to its database, never a diff.
    """

    database: "Database | None"
    id: str | None
    rev: str | None
    dirty: bool
    _fields: dict[str, Any]

    def __init__(
        self,
        database: "Database | None" = None,
        fields: Mapping[str, Any] | None = None,
    ):
        self.database = database
        self.id = None
        self.rev = None
        self._fields = {}
        self.dirty = False
        if fields is not None:
            self.update(fields)

    def __str__(self) -> str:
        return f"{self.database}/{self.id}"

    def __repr__(self) -> str:
        return f"<Document {self.dehydrate()!r}>"

    def __getitem__(self, key: str) -> Any:
        if key == ID_FIELD:
            if self.id is None:
                raise KeyError(key)
            return self.id
        if key == REVISION_FIELD:
            if self.rev is None:
                raise KeyError(key)
            return self.rev
        return self._fields[key]

    def __setitem__(self, key: str, value: Any):
        self._set(key, value)
        self.dirty = True

    def __delitem__(self, key: str):
        if key not in self:
            raise KeyError(key)
        if key == ID_FIELD or key == REVISION_FIELD:
            self._set(key, None)
        else:
            del self._fields[key]
        self.dirty = True

    def __iter__(self) -> Iterator[str]:
        return iter(self.dehydrate())

    def __len__(self) -> int:
        return len(self.dehydrate())

    def _set(self, key: str, value: Any):
        if key == ID_FIELD:
            self.id = value
        elif key == REVISION_FIELD:
            self.rev = value
        else:
            self._fields[key] = value

    def hydrate(self, source: Mapping[str, Any]) -> None:
        """Merge `source` into the document without touching its dirty flag.

        Fields missing from `source` are left alone, so hydrating with just
        `{"_id": ..., "_rev": ...}` after a save keeps the body intact.
        """
        for key, value in source.items():
            self._set(key, value)

    def dehydrate(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id is not None:
            data[ID_FIELD] = self.id
        if self.rev is not None:
            data[REVISION_FIELD] = self.rev
        data.update(self._fields)
        return data

    def mark_clean(self):
        self.dirty = False

    def is_new(self) -> bool:
        return self.rev is None

    def _require_database(self) -> "Database":
        if self.database is None:
            raise InvalidArgumentError("document is not bound to a database")
        return self.database

    def save(self) -> None:
        """Create the document if it was never stored, otherwise update it.

        Documents that are stored and unmodified are not sent again.
        """
        database = self._require_database()
        if self.is_new():
            database.create_document(self)
        elif self.dirty:
            database.update_document(self)

    def delete(self) -> "OkResponse":
        return self._require_database().delete_document(self)
