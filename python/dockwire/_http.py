# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Raw HTTP/1.1 request writing and response preamble parsing.

Only what a ``Connection: close`` exchange with the daemon needs: a request
line with two headers, the status line, and the blank line that ends the
header block.  Header values are never inspected.
"""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import logging
from typing import TYPE_CHECKING, Protocol

from dockwire.errors import (
    ProtocolError,
    SocketCommunicationError,
    SocketTimeoutError,
    TruncatedBodyError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from typing import TypeVar

    from typing_extensions import Self

    _T = TypeVar("_T")

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
# "HTTP/1.1 200" without a reason phrase
_MIN_STATUS_LINE = 12
_READ_SIZE = 65536


class LineReader(Protocol):
    """Anything the preamble parsers can pull lines from."""

    async def readline(self) -> bytes: ...


def format_request(method: str, path: str, host_name: str) -> bytes:
    """Serialize a body-less HTTP/1.1 request."""
    text = f"{method} {path} HTTP/1.1\r\nConnection: close\r\nHost: {host_name}\r\n\r\n"
    try:
        return text.encode("ascii")
    except UnicodeEncodeError as exc:
        msg = f"request line is not ASCII: {method} {path}"
        raise ProtocolError(msg) from exc


async def write_request(
    writer: asyncio.StreamWriter,
    method: str,
    path: str,
    host_name: str,
) -> None:
    """Write an HTTP/1.1 request to the writer."""
    writer.write(format_request(method, path, host_name))
    await writer.drain()
    logger.debug("sent %s %s", method, path)


async def read_status_line(reader: LineReader) -> int:
    """Read the HTTP status line and return the status code."""
    line = await reader.readline()
    if not line:
        msg = "empty response"
        raise ProtocolError(msg)
    if not line.endswith(CRLF):
        msg = f"unterminated status line: {line!r}"
        raise ProtocolError(msg)

    text = line[:-2].decode("ascii", errors="replace")
    parts = text.split(None, 2)
    if (
        len(text) < _MIN_STATUS_LINE
        or len(parts) < 2  # noqa: PLR2004
        or not parts[0].startswith("HTTP/")
    ):
        msg = f"malformed status line: {line!r}"
        raise ProtocolError(msg)

    code = parts[1]
    if len(code) != 3 or not code.isdigit():  # noqa: PLR2004
        msg = f"malformed status code: {code!r}"
        raise ProtocolError(msg)
    logger.debug("status line: %s", text)
    return int(code)


async def skip_headers(reader: LineReader) -> None:
    """Consume header lines up to and including the blank line."""
    while True:
        line = await reader.readline()
        if line == CRLF:
            return
        if not line:
            msg = "connection closed inside the header block"
            raise ProtocolError(msg)


class ResponseBody:
    """Readable response body that owns the daemon connection.

    Positioned at the first byte after the header block.  Closing it closes
    the connection.  Every read honours the optional per-read *timeout*.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        timeout: float | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._timeout = timeout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self, n: int = -1) -> bytes:
        """Read up to *n* bytes, or everything until EOF when *n* is -1.

        Reading to EOF is done in bounded reads, so the deadline applies to
        each of them rather than to the whole body.
        """
        if n >= 0:
            return await self._deadline(self._reader.read(n))
        parts: list[bytes] = []
        while True:
            chunk = await self._deadline(self._reader.read(_READ_SIZE))
            if not chunk:
                break
            parts.append(chunk)
        return b"".join(parts)

    async def readline(self) -> bytes:
        """Read one line including its terminator; ``b""`` at EOF."""
        try:
            return await self._deadline(self._reader.readline())
        except ValueError as exc:
            msg = "line exceeds the stream buffer limit"
            raise ProtocolError(msg) from exc

    async def readexactly(self, n: int) -> bytes:
        """Read exactly *n* bytes."""
        try:
            return await self._deadline(self._reader.readexactly(n))
        except asyncio.IncompleteReadError as exc:
            msg = f"expected {n} bytes, stream ended after {len(exc.partial)}"
            raise TruncatedBodyError(msg) from exc

    async def close(self) -> None:
        """Close the underlying connection.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        with contextlib.suppress(ConnectionError):
            await self._writer.wait_closed()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _deadline(self, aw: Awaitable[_T]) -> _T:
        try:
            if self._timeout is None:
                return await aw
            return await asyncio.wait_for(aw, timeout=self._timeout)
        except (TimeoutError, asyncio.TimeoutError) as exc:
            if self._timeout is None or getattr(exc, "errno", None) is not None:
                raise SocketCommunicationError(str(exc)) from exc
            raise SocketTimeoutError(self._timeout) from exc
        except OSError as exc:
            raise SocketCommunicationError(str(exc)) from exc


@dataclasses.dataclass
class Response:
    """Status code plus the body stream positioned after the headers."""

    status: int
    body: ResponseBody
