# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Blocking facade over :class:`AsyncDaemonClient`.

Manages a background event loop thread so callers never see ``async/await``
unless they want to.  Each call dispatches to the background loop via
:func:`asyncio.run_coroutine_threadsafe` and blocks until it finishes.
"""

from __future__ import annotations

import asyncio
import atexit
import threading
from typing import TYPE_CHECKING

from dockwire._async_client import AsyncDaemonClient
from dockwire._config import load_config
from dockwire.errors import DecodeError
from dockwire.types import ProgressEvent

if TYPE_CHECKING:
    import concurrent.futures
    from collections.abc import Iterator
    from pathlib import Path

    from typing_extensions import Self

    from dockwire._config import DockwireConfig
    from dockwire._endpoint import Endpoint
    from dockwire._pull import AsyncPullStream
    from dockwire.types import Image


class _LoopThread:
    """Singleton background event loop thread shared by all sync clients."""

    _instance: _LoopThread | None = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever,
            name="dockwire-event-loop",
            daemon=True,
        )
        self._thread.start()
        atexit.register(self._shutdown)

    @classmethod
    def get(cls) -> _LoopThread:
        """Return the singleton, creating it lazily."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def run(self, coro: object, *, timeout: float | None = None) -> object:
        """Submit a coroutine and block until it finishes."""
        future: concurrent.futures.Future[object] = asyncio.run_coroutine_threadsafe(
            coro,  # type: ignore[arg-type]
            self._loop,
        )
        return future.result(timeout=timeout)

    def _shutdown(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)


class SyncPullStream:
    """Blocking iterator over an image pull's chunk payloads.

    Wraps :class:`AsyncPullStream`.  Iterate it to completion, or call
    :meth:`close` (or leave the ``with`` block) to stop early.
    """

    def __init__(self, async_stream: AsyncPullStream, lt: _LoopThread) -> None:
        self._async_stream = async_stream
        self._lt = lt

    @property
    def name(self) -> str:
        return self._async_stream.name

    @property
    def closed(self) -> bool:
        return self._async_stream.closed

    @property
    def segments_received(self) -> int:
        return self._async_stream.segments_received

    @property
    def bytes_received(self) -> int:
        return self._async_stream.bytes_received

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> bytes:
        try:
            return self._lt.run(self._async_stream.__anext__())  # type: ignore[return-value]
        except StopAsyncIteration:
            raise StopIteration from None

    def iter_text(self) -> Iterator[str]:
        """Yield each segment decoded as UTF-8."""
        for segment in self:
            try:
                yield segment.decode("utf-8")
            except UnicodeDecodeError as exc:
                self.close()
                raise DecodeError(str(exc)) from exc

    def iter_events(self) -> Iterator[ProgressEvent]:
        """Yield each segment decoded as a :class:`ProgressEvent`."""
        for segment in self:
            try:
                event = ProgressEvent.from_segment(segment)
            except DecodeError:
                self.close()
                raise
            yield event

    def close(self) -> None:
        """Stop the pull and close the connection."""
        self._lt.run(self._async_stream.aclose())

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class DaemonClient:
    """Blocking handle to a Docker-compatible daemon.

    Usage::

        client = DaemonClient()
        for image in client.list_images():
            print(image.repo_tags)

        with client.pull_image("redis:latest") as stream:
            for event in stream.iter_events():
                print(event)
    """

    def __init__(
        self,
        host: str | None = None,
        *,
        host_name: str | None = None,
        timeout: float | None = None,
        config: DockwireConfig | None = None,
    ) -> None:
        self._ac = AsyncDaemonClient(host, host_name=host_name, timeout=timeout, config=config)
        self._lt = _LoopThread.get()

    @property
    def endpoint(self) -> Endpoint:
        """The resolved daemon address."""
        return self._ac.endpoint

    @property
    def timeout(self) -> float | None:
        return self._ac.timeout

    def ping(self) -> str:
        """Ping the daemon, returning its answer (``"OK"``)."""
        return self._lt.run(self._ac.ping())  # type: ignore[return-value]

    def list_images(self) -> list[Image]:
        """List local images (``GET /images/json``)."""
        return self._lt.run(self._ac.list_images())  # type: ignore[return-value]

    def pull_image(self, name: str) -> SyncPullStream:
        """Start pulling *name* and return a blocking progress stream."""
        async_stream: AsyncPullStream = self._lt.run(self._ac.pull_image(name))  # type: ignore[assignment]
        return SyncPullStream(async_stream, self._lt)

    def __repr__(self) -> str:
        return f"DaemonClient(endpoint={str(self.endpoint)!r})"


def connect_with_defaults(config_path: Path | None = None) -> DaemonClient:
    """Create a :class:`DaemonClient` from ``DOCKER_HOST`` and the config files."""
    return DaemonClient(config=load_config(config_path))
