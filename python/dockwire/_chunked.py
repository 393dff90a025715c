# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""HTTP chunked transfer-encoding framing.

Each chunk on the wire is::

    <size in hex>\\r\\n
    <size bytes of data>\\r\\n

and a chunk of size 0 ends the body.  Trailer headers are not read: the
connection is closed right after the terminating chunk.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from dockwire._http import CRLF
from dockwire.errors import ProtocolError, TruncatedBodyError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterable

    from dockwire._http import ResponseBody

_HEX_SIZE = re.compile(rb"[0-9A-Fa-f]+")


async def iter_chunks(body: ResponseBody) -> AsyncGenerator[bytes, None]:
    """Yield the payload of each chunk until the zero-size terminator.

    Lazy and single-pass: every step consumes bytes from *body*, so the
    sequence cannot be restarted.
    """
    while True:
        size = await _read_chunk_size(body)
        if size == 0:
            return
        data = await body.readexactly(size)
        terminator = await body.readexactly(len(CRLF))
        if terminator != CRLF:
            msg = f"chunk of {size} bytes not followed by CRLF: {terminator!r}"
            raise ProtocolError(msg)
        yield data


async def _read_chunk_size(body: ResponseBody) -> int:
    """Read the next non-blank size line and parse it as hex."""
    while True:
        line = await body.readline()
        if not line:
            msg = "stream ended before the terminating chunk"
            raise TruncatedBodyError(msg)
        if not line.endswith(b"\n"):
            msg = f"stream ended inside a chunk size line: {line!r}"
            raise TruncatedBodyError(msg)
        if not line.endswith(CRLF):
            msg = f"chunk size line not terminated by CRLF: {line!r}"
            raise ProtocolError(msg)
        size_str = line[:-2]
        # Some encoders emit stray blank lines between chunks
        if not size_str:
            continue
        if _HEX_SIZE.fullmatch(size_str) is None:
            msg = f"invalid chunk size: {size_str!r}"
            raise ProtocolError(msg)
        return int(size_str, 16)


def encode_chunked(segments: Iterable[bytes]) -> bytes:
    """Frame *segments* with chunked transfer encoding.

    Empty segments are dropped, since a zero-size chunk would end the body.
    """
    parts: list[bytes] = []
    for segment in segments:
        if not segment:
            continue
        parts.append(f"{len(segment):x}".encode("ascii") + CRLF)
        parts.append(segment + CRLF)
    parts.append(b"0" + CRLF + CRLF)
    return b"".join(parts)
