# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Streaming iterator over an image pull's progress messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockwire._chunked import iter_chunks
from dockwire.errors import DecodeError
from dockwire.types import ProgressEvent

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from typing_extensions import Self

    from dockwire._http import ResponseBody


class AsyncPullStream:
    """Async iterator over the decoded chunks of a pull response.

    Returned by ``AsyncDaemonClient.pull_image()``.  Yields raw ``bytes``
    segments, one per chunk.  The connection is closed when the terminating
    chunk arrives, when decoding fails, or on :meth:`aclose`.
    """

    def __init__(self, name: str, body: ResponseBody) -> None:
        self._name = name
        self._body = body
        self._chunks = iter_chunks(body)
        self._segments_received = 0
        self._bytes_received = 0

    @property
    def name(self) -> str:
        """The image reference being pulled."""
        return self._name

    @property
    def closed(self) -> bool:
        return self._body.closed

    @property
    def segments_received(self) -> int:
        return self._segments_received

    @property
    def bytes_received(self) -> int:
        return self._bytes_received

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> bytes:
        if self._body.closed:
            raise StopAsyncIteration
        try:
            segment = await self._chunks.__anext__()
        except Exception:
            # StopAsyncIteration included: the body is complete
            await self.aclose()
            raise
        self._segments_received += 1
        self._bytes_received += len(segment)
        return segment

    async def iter_text(self) -> AsyncGenerator[str, None]:
        """Yield each segment decoded as UTF-8."""
        async for segment in self:
            try:
                yield segment.decode("utf-8")
            except UnicodeDecodeError as exc:
                await self.aclose()
                raise DecodeError(str(exc)) from exc

    async def iter_events(self) -> AsyncGenerator[ProgressEvent, None]:
        """Yield each segment decoded as a :class:`ProgressEvent`."""
        async for segment in self:
            try:
                event = ProgressEvent.from_segment(segment)
            except DecodeError:
                await self.aclose()
                raise
            yield event

    async def aclose(self) -> None:
        """Stop the pull early and close the connection."""
        await self._chunks.aclose()
        await self._body.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
