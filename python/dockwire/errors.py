# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations


class DockwireError(Exception):
    """Base exception for all dockwire errors."""


class SocketError(DockwireError):
    """Error related to the transport to the daemon."""


class SocketConnectionError(SocketError):
    """Cannot connect to the daemon socket."""

    def __init__(self, socket_path: str, detail: str = "") -> None:
        self.socket_path = socket_path
        msg = f"Cannot connect to socket at {socket_path}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnsupportedEndpoint(SocketError):
    """The daemon address uses a scheme this client cannot open."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"Unsupported daemon address: {host}")


class SocketCommunicationError(SocketError):
    """Error during communication over the socket."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = self._prefix
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    _prefix = "Socket communication error"


class ProtocolError(SocketCommunicationError):
    """The daemon sent bytes that do not follow HTTP/1.1 framing."""

    _prefix = "Protocol error"


class TruncatedBodyError(SocketCommunicationError):
    """The stream ended before the end of the response body."""

    _prefix = "Truncated response body"


class SocketTimeoutError(SocketCommunicationError):
    """A read from the daemon did not complete within the deadline."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"no data within {timeout:g}s")

    _prefix = "Timed out waiting for daemon"


class HttpStatusError(DockwireError):
    """The daemon answered with an unexpected HTTP status."""

    def __init__(self, status: int, expected: int = 200) -> None:
        self.status = status
        self.expected = expected
        super().__init__(f"Status: {status} != {expected}")


class DecodeError(DockwireError):
    """A payload is not valid text or JSON where it has to be."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = "Cannot decode payload"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
