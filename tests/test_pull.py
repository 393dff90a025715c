"""Unit tests for the async pull stream wrapper."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from dockwire._http import ResponseBody
from dockwire._pull import AsyncPullStream
from dockwire.errors import DecodeError, ProtocolError


def _stream(data: bytes) -> tuple[AsyncPullStream, MagicMock]:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    writer = MagicMock()
    writer.wait_closed = AsyncMock()
    return AsyncPullStream("redis", ResponseBody(reader, writer)), writer


async def test_iterates_segments_and_closes_at_end() -> None:
    stream, writer = _stream(b"3\r\nabc\r\n2\r\nde\r\n0\r\n\r\n")
    assert [s async for s in stream] == [b"abc", b"de"]
    assert stream.closed
    assert stream.segments_received == 2
    assert stream.bytes_received == 5
    writer.close.assert_called_once()


async def test_exhausted_stream_stays_exhausted() -> None:
    stream, _ = _stream(b"0\r\n\r\n")
    assert [s async for s in stream] == []
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


async def test_aclose_stops_early() -> None:
    stream, writer = _stream(b"1\r\na\r\n1\r\nb\r\n0\r\n\r\n")
    assert await stream.__anext__() == b"a"
    await stream.aclose()
    assert stream.closed
    writer.close.assert_called_once()
    assert [s async for s in stream] == []


async def test_context_manager_closes() -> None:
    stream, writer = _stream(b"1\r\na\r\n0\r\n\r\n")
    async with stream:
        assert await stream.__anext__() == b"a"
    writer.close.assert_called_once()


async def test_protocol_error_closes_connection() -> None:
    stream, writer = _stream(b"q\r\n")
    with pytest.raises(ProtocolError):
        await stream.__anext__()
    assert stream.closed
    writer.close.assert_called_once()


async def test_iter_text() -> None:
    stream, _ = _stream(b"6\r\nh\xc3\xa9llo\r\n0\r\n\r\n")
    assert [t async for t in stream.iter_text()] == ["héllo"]


async def test_iter_text_invalid_utf8() -> None:
    stream, _ = _stream(b"2\r\n\xff\xfe\r\n0\r\n\r\n")
    with pytest.raises(DecodeError):
        _ = [t async for t in stream.iter_text()]
    assert stream.closed


async def test_iter_events_rejects_non_json() -> None:
    stream, _ = _stream(b"5\r\nhello\r\n0\r\n\r\n")
    with pytest.raises(DecodeError):
        _ = [e async for e in stream.iter_events()]
    assert stream.closed
