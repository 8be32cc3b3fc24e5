"""
pytest configuration and fixtures.
"""

import json
import socket
import threading
from typing import Any, Generator

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from settee import Connection, Database
from settee.adapter import Adapter
from settee.http import HttpRequest, HttpResponse


class RecordingAdapter(Adapter):
    """Adapter that answers from a queue and remembers every request."""

    def __init__(self):
        super().__init__()
        self.requests: list[HttpRequest] = []
        self.responses: list[HttpResponse | Exception] = []

    def reply(self, status: int = 200, body: Any = None, raw: bytes | None = None, headers=None):
        if raw is None:
            raw = b"" if body is None else json.dumps(body).encode()
        self.responses.append(HttpResponse(status, raw, headers or {"Content-Type": "application/json"}))
        return self

    def fail(self, exc: Exception):
        self.responses.append(exc)
        return self

    def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request}")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    @property
    def last(self) -> HttpRequest:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def connection(adapter: RecordingAdapter) -> Connection:
    return Connection("http://couch.test:5984", adapter)


@pytest.fixture
def db(connection: Connection) -> Database:
    return connection.database("pages")


@pytest.fixture
def free_port() -> int:
    """A port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def garbage_server() -> Generator[str, None, None]:
    """A listener that answers every connection with bytes that are not HTTP."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    listener.settimeout(0.2)
    stop = threading.Event()

    def serve():
        while not stop.is_set():
            try:
                conn, _ = listener.accept()
            except OSError:
                continue
            with conn:
                conn.settimeout(1.0)
                try:
                    conn.recv(65536)
                    conn.sendall(b"THIS IS NOT HTTP\r\n\r\n")
                except OSError:
                    pass

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{listener.getsockname()[1]}/"

    stop.set()
    thread.join(timeout=5.0)
    listener.close()
