from typing import Any, NotRequired, TypedDict


class ServerInfo(TypedDict):
    couchdb: str
    version: str
    uuid: NotRequired[str]
    vendor: NotRequired[dict[str, str]]


class UuidsResponse(TypedDict):
    uuids: list[str]


class DatabaseResponse(TypedDict):
    db_name: str
    doc_count: int
    doc_del_count: NotRequired[int]
    update_seq: Any


class OkResponse(TypedDict):
    ok: bool
    id: NotRequired[str]
    rev: NotRequired[str]


class ViewRow(TypedDict):
    id: NotRequired[str]
    key: Any
    value: NotRequired[Any]
    doc: NotRequired[dict[str, Any] | None]
    error: NotRequired[str]


class ViewResponse(TypedDict):
    total_rows: NotRequired[int]
    offset: NotRequired[int]
    update_seq: NotRequired[Any]
    rows: list[ViewRow]
