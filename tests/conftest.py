"""Shared fixtures for dockwire tests."""

from __future__ import annotations

import json
import pathlib
import shutil
import socketserver
import tempfile
import threading
import time
from typing import TYPE_CHECKING

import pytest

from dockwire._endpoint import Endpoint

if TYPE_CHECKING:
    from collections.abc import Iterator


def http_response(status: str, body: bytes = b"", headers: tuple[str, ...] = ()) -> bytes:
    """Build a raw HTTP/1.1 response."""
    head = [f"HTTP/1.1 {status}", *headers, "", ""]
    return "\r\n".join(head).encode("ascii") + body


def chunked_response(raw_body: bytes) -> bytes:
    """Build a 200 response carrying an already chunk-framed body."""
    return http_response(
        "200 OK",
        raw_body,
        ("Content-Type: application/json", "Transfer-Encoding: chunked"),
    )


def image_json(image_id: str, tags: list[str] | None) -> dict[str, object]:
    """A minimal ``GET /images/json`` entry."""
    return {
        "Id": image_id,
        "Created": 1700000000,
        "Containers": 0,
        "RepoTags": tags,
        "Size": 1024,
        "ParentId": "",
    }


def images_response(*entries: dict[str, object]) -> bytes:
    return http_response(
        "200 OK",
        json.dumps(list(entries)).encode("utf-8"),
        ("Content-Type: application/json",),
    )


class MockDaemon:
    """Threaded server that answers every request with canned bytes.

    Listens on the Unix socket at *socket_path*, or on an ephemeral
    127.0.0.1 port when *socket_path* is None.  Each connection reads one
    request head, sends ``response`` and closes.  With ``stall`` set, the
    response is sent only after that many seconds.
    """

    def __init__(self, socket_path: str | None = None) -> None:
        self.socket_path = socket_path
        self.response = http_response("200 OK")
        self.stall = 0.0
        self.requests: list[bytes] = []
        daemon = self

        class _Handler(socketserver.BaseRequestHandler):
            def handle(self) -> None:
                data = b""
                while b"\r\n\r\n" not in data:
                    chunk = self.request.recv(4096)
                    if not chunk:
                        break
                    data += chunk
                daemon.requests.append(data)
                if daemon.stall:
                    time.sleep(daemon.stall)
                self.request.sendall(daemon.response)

        if socket_path is None:
            self._server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _Handler)
        else:
            self._server = socketserver.ThreadingUnixStreamServer(socket_path, _Handler)
        self._server.daemon_threads = True
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def endpoint(self) -> Endpoint:
        if self.socket_path is None:
            return Endpoint("tcp", "127.0.0.1", self._server.server_address[1])
        return Endpoint("unix", self.socket_path)

    @property
    def host(self) -> str:
        return str(self.endpoint)

    @property
    def last_request(self) -> bytes:
        return self.requests[-1]

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def short_tmp() -> Iterator[pathlib.Path]:
    """A temp dir with a short path (Unix socket paths are limited to ~100 bytes)."""
    path = pathlib.Path(tempfile.mkdtemp(prefix="dw-", dir="/tmp"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def mock_daemon(short_tmp: pathlib.Path) -> Iterator[MockDaemon]:
    """A running mock daemon on a fresh Unix socket."""
    daemon = MockDaemon(str(short_tmp / "d.sock"))
    daemon.start()
    yield daemon
    daemon.stop()


@pytest.fixture
def mock_tcp_daemon() -> Iterator[MockDaemon]:
    """A running mock daemon on an ephemeral loopback TCP port."""
    daemon = MockDaemon()
    daemon.start()
    yield daemon
    daemon.stop()
