from .adapter import Adapter, HttpxAdapter, RequestsAdapter
from .connection import Connection, connect
from .db import Database
from .document import Document
from .errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    ProtocolError,
    SaveConflictError,
    SaveError,
    ServerError,
    SetteeError,
    TransportError,
    UnknownConnectionError,
)
from .http import HttpMessage, HttpRequest, HttpResponse, normalize_header_name
from .registry import ConnectionRegistry
from .view import AllDocsResult, ViewResult, encode_view_options

__all__ = [
    "Adapter",
    "AllDocsResult",
    "ConflictError",
    "Connection",
    "ConnectionRegistry",
    "Database",
    "Document",
    "HttpMessage",
    "HttpRequest",
    "HttpResponse",
    "HttpxAdapter",
    "InvalidArgumentError",
    "NotFoundError",
    "ProtocolError",
    "RequestsAdapter",
    "SaveConflictError",
    "SaveError",
    "ServerError",
    "SetteeError",
    "TransportError",
    "UnknownConnectionError",
    "ViewResult",
    "connect",
    "encode_view_options",
    "normalize_header_name",
]
