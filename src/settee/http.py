import os
from typing import IO, Any, Iterable

Content = bytes | str | IO[bytes] | None

GET = "GET"
POST = "POST"
PUT = "PUT"
DELETE = "DELETE"
HEAD = "HEAD"
COPY = "COPY"


def normalize_header_name(name: str) -> str:
    """Return the canonical spelling of an HTTP header name.

    >>> normalize_header_name("x-custom-header")
    'X-Custom-Header'
    >>> normalize_header_name("ETAG")
    'ETag'
    """
    lower = name.lower()
    if lower == "etag":
        return "ETag"
    if lower == "www-authenticate":
        return "WWW-Authenticate"
    return "-".join(part.capitalize() for part in lower.split("-"))


class HttpMessage:
    content: Content
    headers: dict[str, list[str]]

    def __init__(self, content: Content = None, headers: dict[str, Any] | None = None):
        self.content = content
        self.headers = {}
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    def clear_content(self):
        self.content = None

    def has_content(self) -> bool:
        return self.content is not None and self.content not in (b"", "")

    def content_size(self) -> int | None:
        if self.content is None:
            return 0
        if isinstance(self.content, (bytes, str)):
            return len(self.content)
        try:
            return os.fstat(self.content.fileno()).st_size
        except (AttributeError, OSError):
            return None

    @property
    def content_type(self) -> str | None:
        values = self.get_header("Content-Type")
        if values:
            return values[0]
        return None

    @content_type.setter
    def content_type(self, value: str):
        self.set_header("Content-Type", value)

    def get_header(self, name: str) -> list[str] | None:
        return self.headers.get(normalize_header_name(name))

    def has_header(self, name: str) -> bool:
        return normalize_header_name(name) in self.headers

    def set_header(self, name: str, value: str | Iterable[str], replace: bool = True):
        """Set a header, replacing existing values unless replace is False."""
        name = normalize_header_name(name)
        values = [value] if isinstance(value, str) else list(value)
        if replace or name not in self.headers:
            self.headers[name] = values
        else:
            self.headers[name].extend(values)

    def remove_header(self, name: str) -> list[str] | None:
        return self.headers.pop(normalize_header_name(name), None)

    def clear_headers(self):
        self.headers = {}

    def flat_headers(self) -> dict[str, str]:
        return {name: ", ".join(values) for name, values in self.headers.items()}


class HttpRequest(HttpMessage):
    method: str
    destination: str | None

    def __init__(
        self,
        method: str = GET,
        destination: str | None = None,
        content: Content = None,
        headers: dict[str, Any] | None = None,
    ):
        super().__init__(content, headers)
        self.method = method.upper()
        self.destination = destination

    def __str__(self) -> str:
        return f"{self.method} {self.destination}"


class HttpResponse(HttpMessage):
    status: int

    def __init__(
        self,
        status: int,
        content: Content = None,
        headers: dict[str, Any] | None = None,
    ):
        super().__init__(content, headers)
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        if isinstance(self.content, bytes):
            return self.content.decode("utf-8", errors="replace")
        if isinstance(self.content, str):
            return self.content
        return ""
