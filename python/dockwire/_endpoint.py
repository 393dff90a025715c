# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Daemon address resolution.

Addresses use the Docker ``DOCKER_HOST`` syntax::

    unix:///var/run/docker.sock
    tcp://127.0.0.1:2375
    npipe:////./pipe/docker_engine

A bare absolute path is taken as a Unix socket path.
"""

from __future__ import annotations

import dataclasses
import os
import sys
from typing import TYPE_CHECKING

from dockwire.errors import UnsupportedEndpoint

if TYPE_CHECKING:
    from dockwire._config import DockwireConfig

if sys.platform == "win32":
    DEFAULT_DOCKER_HOST = "npipe:////./pipe/docker_engine"
else:
    DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"

SCHEME_UNIX = "unix"
SCHEME_TCP = "tcp"
SCHEME_NPIPE = "npipe"


@dataclasses.dataclass(frozen=True)
class Endpoint:
    """A parsed daemon address."""

    scheme: str
    address: str
    port: int | None = None

    def __str__(self) -> str:
        if self.scheme == SCHEME_TCP:
            if ":" in self.address:
                return f"tcp://[{self.address}]:{self.port}"
            return f"tcp://{self.address}:{self.port}"
        return f"{self.scheme}://{self.address}"


def parse_host(host: str) -> Endpoint:
    """Parse a ``DOCKER_HOST``-style string into an :class:`Endpoint`."""
    if host.startswith("/"):
        return Endpoint(SCHEME_UNIX, host)

    scheme, sep, rest = host.partition("://")
    if not sep or not rest:
        raise UnsupportedEndpoint(host)

    if scheme == SCHEME_UNIX:
        return Endpoint(SCHEME_UNIX, rest)
    if scheme == SCHEME_NPIPE:
        return Endpoint(SCHEME_NPIPE, rest)
    if scheme == SCHEME_TCP:
        address, colon, port = rest.rstrip("/").rpartition(":")
        if address.startswith("[") and address.endswith("]"):
            # IPv6 literal
            address = address[1:-1]
        if not colon or not address or not port.isdigit():
            raise UnsupportedEndpoint(host)
        return Endpoint(SCHEME_TCP, address, int(port))
    raise UnsupportedEndpoint(host)


def resolve_endpoint(
    host: str | None = None,
    config: DockwireConfig | None = None,
) -> Endpoint:
    """Pick the daemon address and parse it.

    Resolution order:
    1. *host* argument
    2. ``DOCKER_HOST`` env var
    3. ``host`` from *config*
    4. :data:`DEFAULT_DOCKER_HOST`

    """
    if host:
        return parse_host(host)
    env_host = os.environ.get("DOCKER_HOST")
    if env_host:
        return parse_host(env_host)
    if config is not None and config.host:
        return parse_host(config.host)
    return parse_host(DEFAULT_DOCKER_HOST)
