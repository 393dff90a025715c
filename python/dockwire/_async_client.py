# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Async daemon client: resolves the endpoint once, then one connection per call."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockwire import _socket_client as sc
from dockwire._config import load_config
from dockwire._endpoint import resolve_endpoint

if TYPE_CHECKING:
    from pathlib import Path

    from dockwire._config import DockwireConfig
    from dockwire._endpoint import Endpoint
    from dockwire._pull import AsyncPullStream
    from dockwire.types import Image


class AsyncDaemonClient:
    """Async handle to a Docker-compatible daemon.

    Holds no connection: every operation opens its own and closes it when
    the response is consumed.  Safe to share between tasks.
    """

    def __init__(
        self,
        host: str | None = None,
        *,
        host_name: str | None = None,
        timeout: float | None = None,
        config: DockwireConfig | None = None,
    ) -> None:
        self._endpoint = resolve_endpoint(host, config)
        self._host_name = host_name or (config.host_name if config else "localhost")
        self._timeout = timeout if timeout is not None else (config.timeout if config else None)

    @classmethod
    def from_env(cls, config_path: Path | None = None) -> AsyncDaemonClient:
        """Build a client from ``DOCKER_HOST`` and the config files."""
        return cls(config=load_config(config_path))

    @property
    def endpoint(self) -> Endpoint:
        """The resolved daemon address."""
        return self._endpoint

    @property
    def host_name(self) -> str:
        return self._host_name

    @property
    def timeout(self) -> float | None:
        """Per-read deadline in seconds, ``None`` to block indefinitely."""
        return self._timeout

    async def ping(self) -> str:
        """Ping the daemon, returning its answer (``"OK"``)."""
        return await sc.ping(self._endpoint, host_name=self._host_name, timeout=self._timeout)

    async def list_images(self) -> list[Image]:
        """List local images (``GET /images/json``)."""
        return await sc.list_images(
            self._endpoint, host_name=self._host_name, timeout=self._timeout
        )

    async def pull_image(self, name: str) -> AsyncPullStream:
        """Start pulling *name* and return the progress stream.

        Usage::

            async with await client.pull_image("redis:latest") as stream:
                async for event in stream.iter_events():
                    print(event)
        """
        return await sc.pull_image(
            self._endpoint, name, host_name=self._host_name, timeout=self._timeout
        )

    def __repr__(self) -> str:
        return f"AsyncDaemonClient(endpoint={str(self._endpoint)!r})"
