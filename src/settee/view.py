import json
from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping

from .document import Document
from .record import Record

if TYPE_CHECKING:
    from .db import Database


def _json(value: Any) -> str:
    return json.dumps(value)


def _bool(value: Any) -> str:
    """Encode a flag as "true" or "false".

    The strings "false", "0" and "" count as false, so `{"descending": "false"}`
    really means false rather than following the truthiness of a non-empty
    string.
    """
    if isinstance(value, str):
        value = value.lower() not in ("", "0", "false")
    return "true" if value else "false"


def _stale(value: Any) -> str | None:
    return "ok" if value else None


VIEW_OPTION_RULES: tuple[tuple[str, Callable[[Any], Any]], ...] = (
    ("key", _json),
    ("startkey", _json),
    ("endkey", _json),
    ("limit", int),
    ("skip", int),
    ("group_level", int),
    ("descending", _bool),
    ("group", _bool),
    ("reduce", _bool),
    ("include_docs", _bool),
    ("stale", _stale),
)

_RULES = dict(VIEW_OPTION_RULES)


def encode_view_options(
    options: Mapping[str, Any] | None,
) -> tuple[dict[str, Any], dict[str, list[Any]] | None]:
    """Turn caller view options into query parameters and an optional body.

    Returns `(query, body)`. `body` is only set when `keys` was given, in
    which case the view has to be requested with POST.
    Options whose value is None are treated as absent.

    >>> encode_view_options({"key": "abc", "limit": "10", "descending": True})
    ({'key': '"abc"', 'limit': 10, 'descending': 'true'}, None)
    """
    query: dict[str, Any] = {}
    body = None
    for name, value in (options or {}).items():
        if value is None:
            continue
        if name == "keys":
            if not isinstance(value, (list, tuple)):
                value = [value]
            body = {"keys": list(value)}
            continue
        rule = _RULES.get(name)
        if rule is not None:
            value = rule(value)
        if value is not None:
            query[name] = value
    return query, body


class ViewResultRow(Record):
    database: "Database"
    document: Document | None

    def __init__(self, database: "Database", data: Mapping[str, Any] | None = None):
        self.database = database
        self.document = None
        super().__init__(database.connection, data)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} key={self.key!r}>"

    def hydrate(self, source: Mapping[str, Any]) -> None:
        doc = source.get("doc")
        super().hydrate({k: v for k, v in source.items() if k != "doc" or doc is None})
        if doc is not None:
            self.document = Document(self.database)
            self.document.hydrate(doc)

    def dehydrate(self) -> dict[str, Any]:
        data = super().dehydrate()
        if self.document is not None:
            data["doc"] = self.document.dehydrate()
        return data

    @property
    def id(self) -> str | None:
        return self._data.get("id")

    @property
    def key(self) -> Any:
        return self._data.get("key")

    @property
    def value(self) -> Any:
        return self._data.get("value")

    @property
    def error(self) -> str | None:
        return self._data.get("error")

    def get_document(self) -> Document | None:
        return self.document


class AllDocsResultRow(ViewResultRow):
    @property
    def rev(self) -> str | None:
        value = self.value
        if isinstance(value, Mapping):
            return value.get("rev")
        return None

    @property
    def deleted(self) -> bool:
        value = self.value
        return isinstance(value, Mapping) and bool(value.get("deleted"))


class ViewResult(Record):
    """Rows of a view, in exactly the order the server sent them."""

    row_class: type[ViewResultRow] = ViewResultRow

    database: "Database"
    rows: list[ViewResultRow]

    def __init__(self, database: "Database", data: Mapping[str, Any] | None = None):
        self.database = database
        self.rows = []
        super().__init__(database.connection, data)

    def hydrate(self, source: Mapping[str, Any]) -> None:
        rows = source.get("rows")
        super().hydrate({k: v for k, v in source.items() if k != "rows"})
        if rows is not None:
            self.rows = [self.row_class(self.database, row) for row in rows]

    def dehydrate(self) -> dict[str, Any]:
        data = super().dehydrate()
        data["rows"] = [row.dehydrate() for row in self.rows]
        return data

    @property
    def total_rows(self) -> int | None:
        return self._data.get("total_rows")

    @property
    def offset(self) -> int | None:
        return self._data.get("offset")

    @property
    def update_seq(self) -> Any:
        return self._data.get("update_seq")

    def documents(self) -> list[Document]:
        return [row.document for row in self.rows if row.document is not None]

    def __iter__(self) -> Iterator[ViewResultRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> ViewResultRow:
        return self.rows[index]


class AllDocsResult(ViewResult):
    row_class = AllDocsResultRow
