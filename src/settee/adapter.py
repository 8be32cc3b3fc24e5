"""Transports that carry an HttpRequest to the server and bring back an
HttpResponse.

Adapters only know about HTTP. A non-2xx answer is a perfectly good
response as far as they are concerned; turning it into an error is the
Connection's job. What adapters do raise is TransportError when the
exchange never completed and ProtocolError when what came back was not
HTTP.

Neither adapter is safe to share between threads. Give every Connection
its own.
"""

import http.client
from abc import ABC, abstractmethod

import httpx
import requests
import urllib3

from .errors import InvalidArgumentError, ProtocolError, TransportError
from .http import Content, HttpRequest, HttpResponse
from .log import logger


class Adapter(ABC):
    timeout: float
    auth: tuple[str, str] | None

    def __init__(self, timeout: float = 5, auth: tuple[str, str] | None = None):
        self.timeout = timeout
        self.auth = auth

    @abstractmethod
    def execute(self, request: HttpRequest) -> HttpResponse:
        raise NotImplementedError

    def close(self):
        pass

    def body(self, request: HttpRequest) -> Content:
        content = request.content
        if content is None or isinstance(content, bytes):
            return content
        if isinstance(content, str):
            return content.encode("utf-8")
        if hasattr(content, "read"):
            return content
        raise InvalidArgumentError(
            f"{type(self).__name__} cannot send content of type {type(content).__name__}"
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _malformed(exc: BaseException | None) -> bool:
    """Whether a requests failure was caused by a response that is not HTTP.

    urllib3 reports those as ProtocolError("Connection aborted.", reason),
    which requests then wraps in a ConnectionError. A reason that is an
    OSError but not an HTTPException is a dropped connection, not bad data.
    """
    while exc is not None:
        for arg in (exc, *exc.args):
            if isinstance(arg, urllib3.exceptions.ProtocolError):
                reason = arg.args[1] if len(arg.args) > 1 else None
                return isinstance(reason, http.client.HTTPException) or not isinstance(reason, OSError)
        exc = exc.__cause__ or exc.__context__
    return False


class RequestsAdapter(Adapter):
    session: requests.Session

    def __init__(
        self,
        timeout: float = 5,
        auth: tuple[str, str] | None = None,
        session: requests.Session | None = None,
    ):
        super().__init__(timeout, auth)
        self.session = session if session is not None else requests.Session()

    def execute(self, request: HttpRequest) -> HttpResponse:
        if request.destination is None:
            raise InvalidArgumentError("request has no destination")
        try:
            resp = self.session.request(
                request.method,
                request.destination,
                data=self.body(request),
                headers=request.flat_headers(),
                auth=self.auth,
                timeout=self.timeout,
            )
        except (
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.ContentDecodingError,
            requests.exceptions.InvalidHeader,
        ) as e:
            logger.debug(f"{request} failed: {e}")
            raise ProtocolError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.debug(f"{request} failed: {e}")
            if _malformed(e):
                raise ProtocolError(str(e)) from e
            raise TransportError(str(e)) from e

        return HttpResponse(resp.status_code, resp.content, dict(resp.headers))

    def close(self):
        self.session.close()


class HttpxAdapter(Adapter):
    client: httpx.Client

    def __init__(
        self,
        timeout: float = 5,
        auth: tuple[str, str] | None = None,
        client: httpx.Client | None = None,
    ):
        super().__init__(timeout, auth)
        self.client = client if client is not None else httpx.Client()

    def execute(self, request: HttpRequest) -> HttpResponse:
        if request.destination is None:
            raise InvalidArgumentError("request has no destination")
        kwargs = {}
        if self.auth is not None:
            kwargs["auth"] = self.auth
        try:
            resp = self.client.request(
                request.method,
                request.destination,
                content=self.body(request),
                headers=request.flat_headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except (httpx.ProtocolError, httpx.DecodingError) as e:
            logger.debug(f"{request} failed: {e}")
            raise ProtocolError(str(e)) from e
        except httpx.TransportError as e:
            logger.debug(f"{request} failed: {e}")
            raise TransportError(str(e)) from e

        return HttpResponse(resp.status_code, resp.content, dict(resp.headers))

    def close(self):
        self.client.close()


def create(name: str, timeout: float = 5, auth: tuple[str, str] | None = None) -> Adapter:
    match name:
        case "requests":
            return RequestsAdapter(timeout, auth)
        case "httpx":
            return HttpxAdapter(timeout, auth)
    raise InvalidArgumentError(f'unknown adapter "{name}"')
