import json
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from . import adapter as adapters
from . import config
from .adapter import Adapter
from .db import Database
from .errors import ConflictError, NotFoundError, ServerError
from .http import DELETE, GET, POST, PUT, HttpRequest, HttpResponse
from .log import logger
from .types import OkResponse, ServerInfo

_KEEP_SLASH = ("_design/", "_local/")


def quote_segment(segment: str) -> str:
    for prefix in _KEEP_SLASH:
        if segment.startswith(prefix):
            return prefix + quote(segment[len(prefix) :], safe="")
    return quote(segment, safe="")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class Connection:
    base_url: str
    adapter: Adapter

    def __init__(self, base_url: str | None = None, adapter: Adapter | None = None):
        self.base_url = (base_url or config.url).rstrip("/")
        self.adapter = adapter if adapter is not None else adapters.create(
            config.adapter, config.timeout, config.auth()
        )

    def __str__(self) -> str:
        return self.base_url

    def __repr__(self) -> str:
        return f"<Connection {self.base_url} via {type(self.adapter).__name__}>"

    def build_uri(self, *segments: str, options: Mapping[str, Any] | None = None) -> str:
        """Join the base URL with escaped path segments and a query string.

        Option values must already be serialized. `None` values are dropped,
        so `build_uri("db", "a b", options={"rev": None})` is just
        `{base_url}/db/a%20b`.
        """
        uri = self.base_url + "/" + "/".join(quote_segment(str(s)) for s in segments)
        query = {k: _query_value(v) for k, v in (options or {}).items() if v is not None}
        if query:
            uri += "?" + urlencode(query)
        return uri

    def send_request(self, request: HttpRequest, decode: bool = True) -> Any:
        resp = self.adapter.execute(request)
        logger.debug(f"{request.method} {request.destination} {resp.status}")

        if not resp.ok:
            logger.debug(f"  body: {resp.text()}")
            raise self._server_error(resp)

        if not decode or not resp.has_content():
            return resp.content
        try:
            return json.loads(resp.content)
        except (TypeError, ValueError):
            return resp.content

    def _server_error(self, resp: HttpResponse) -> ServerError:
        error = reason = None
        try:
            body = json.loads(resp.content) if resp.has_content() else None
        except (TypeError, ValueError):
            body = None
        if isinstance(body, Mapping):
            error = body.get("error")
            reason = body.get("reason")
        else:
            reason = resp.text() or None

        match resp.status:
            case 404:
                return NotFoundError(resp.status, error, reason)
            case 409:
                return ConflictError(resp.status, error, reason)
        return ServerError(resp.status, error, reason)

    def request(
        self,
        method: str,
        *segments: str,
        options: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        decode: bool = True,
    ) -> Any:
        request = HttpRequest(method, self.build_uri(*segments, options=options))
        for name, value in (headers or {}).items():
            request.set_header(name, value)
        if body is not None:
            request.content = json.dumps(body)
            request.content_type = "application/json"
        return self.send_request(request, decode)

    def get(self, *segments: str, options: Mapping[str, Any] | None = None, decode: bool = True) -> Any:
        return self.request(GET, *segments, options=options, decode=decode)

    def post(self, *segments: str, body: Any = None, options: Mapping[str, Any] | None = None) -> Any:
        return self.request(POST, *segments, options=options, body=body)

    def put(self, *segments: str, body: Any = None, options: Mapping[str, Any] | None = None) -> Any:
        return self.request(PUT, *segments, options=options, body=body)

    def delete(
        self,
        *segments: str,
        options: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self.request(DELETE, *segments, options=options, headers=headers)

    def list_databases(self) -> list[str]:
        return self.get("_all_dbs")

    def create_database(self, name: str) -> Database:
        self.put(name)
        return Database(self, name)

    def delete_database(self, name: str) -> OkResponse:
        return self.delete(name)

    def retrieve_database(self, name: str) -> Database:
        return Database(self, name, self.get(name))

    def database(self, name: str) -> Database:
        return Database(self, name)

    def retrieve_uuids(self, count: int = 1) -> list[str]:
        return self.get("_uuids", options={"count": int(count)})["uuids"]

    def retrieve_config(self, section: str | None = None, key: str | None = None) -> Any:
        segments = ["_config"]
        if section:
            segments.append(section)
            if key:
                segments.append(key)
        return self.get(*segments)

    def retrieve_info(self) -> ServerInfo:
        return self.get()

    def retrieve_stats(self) -> dict[str, Any]:
        return self.get("_stats")

    def close(self):
        self.adapter.close()


def connect(url: str | None = None, adapter: Adapter | str | None = None) -> Connection:
    if isinstance(adapter, str):
        adapter = adapters.create(adapter, config.timeout, config.auth())
    return Connection(url, adapter)
