# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

from importlib.metadata import version

from dockwire._chunked import encode_chunked
from dockwire._config import DockwireConfig, load_config
from dockwire._endpoint import DEFAULT_DOCKER_HOST, Endpoint, parse_host, resolve_endpoint
from dockwire._sync_client import DaemonClient, SyncPullStream, connect_with_defaults
from dockwire.errors import (
    DecodeError,
    DockwireError,
    HttpStatusError,
    ProtocolError,
    SocketCommunicationError,
    SocketConnectionError,
    SocketError,
    SocketTimeoutError,
    TruncatedBodyError,
    UnsupportedEndpoint,
)
from dockwire.types import Image, ProgressEvent

__version__ = version("dockwire")


def get_version() -> str:
    """Return the dockwire package version string."""
    return __version__


PullStream = SyncPullStream

__all__ = [
    "DEFAULT_DOCKER_HOST",
    "DaemonClient",
    "DecodeError",
    "DockwireConfig",
    "DockwireError",
    "Endpoint",
    "HttpStatusError",
    "Image",
    "ProgressEvent",
    "ProtocolError",
    "PullStream",
    "SocketCommunicationError",
    "SocketConnectionError",
    "SocketError",
    "SocketTimeoutError",
    "TruncatedBodyError",
    "UnsupportedEndpoint",
    "__version__",
    "connect_with_defaults",
    "encode_chunked",
    "get_version",
    "load_config",
    "parse_host",
    "resolve_endpoint",
]
