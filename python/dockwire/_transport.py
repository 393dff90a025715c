# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Byte-stream connections to the daemon.

One connection per request; nothing here is pooled or reused.
"""

from __future__ import annotations

import asyncio
import logging

from dockwire._endpoint import SCHEME_TCP, SCHEME_UNIX, Endpoint
from dockwire.errors import SocketConnectionError, UnsupportedEndpoint

logger = logging.getLogger(__name__)


async def open_connection(
    endpoint: Endpoint,
    *,
    timeout: float | None = None,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Open an async connection to the daemon endpoint."""
    if endpoint.scheme == SCHEME_UNIX:
        connect = asyncio.open_unix_connection(endpoint.address)
    elif endpoint.scheme == SCHEME_TCP:
        connect = asyncio.open_connection(endpoint.address, endpoint.port)
    else:
        raise UnsupportedEndpoint(str(endpoint))

    logger.debug("connecting to %s", endpoint)
    try:
        return await asyncio.wait_for(connect, timeout=timeout)
    except (TimeoutError, asyncio.TimeoutError) as exc:
        # ETIMEDOUT from the OS carries an errno; the wait_for deadline does not
        if timeout is None or getattr(exc, "errno", None) is not None:
            raise SocketConnectionError(endpoint.address, str(exc)) from exc
        raise SocketConnectionError(endpoint.address, f"timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise SocketConnectionError(endpoint.address, str(exc)) from exc
