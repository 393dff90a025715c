# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Async HTTP-over-socket client for the Docker engine API.

Each function opens its own connection to the daemon, performs one HTTP
request with ``Connection: close``, and hands back either a fully read
result or a stream that owns the connection until it is drained or closed.

No header is inspected to pick the body framing: the list path reads to
EOF, the pull path decodes chunked transfer encoding.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING

from dockwire._http import Response, ResponseBody, read_status_line, skip_headers, write_request
from dockwire._pull import AsyncPullStream
from dockwire._transport import open_connection
from dockwire.errors import HttpStatusError, SocketCommunicationError
from dockwire.types import decode_images

if TYPE_CHECKING:
    from dockwire._endpoint import Endpoint
    from dockwire.types import Image

logger = logging.getLogger(__name__)

_OK = 200
_DEFAULT_HOST_NAME = "localhost"


async def request(
    endpoint: Endpoint,
    method: str,
    path: str,
    *,
    host_name: str = _DEFAULT_HOST_NAME,
    timeout: float | None = None,
) -> Response:
    """Send a request and return the status plus the unread body.

    Opens a new connection per call.  The caller owns ``response.body`` and
    must close it.
    """
    reader, writer = await open_connection(endpoint, timeout=timeout)
    body = ResponseBody(reader, writer, timeout=timeout)
    try:
        await write_request(writer, method, path, host_name)
        status = await read_status_line(body)
        await skip_headers(body)
    except OSError as exc:
        await body.close()
        raise SocketCommunicationError(str(exc)) from exc
    except BaseException:
        await body.close()
        raise
    logger.debug("%s %s -> %d", method, path, status)
    return Response(status=status, body=body)


async def _expect_ok(response: Response) -> None:
    """Close the connection and raise unless the status is 200."""
    if response.status != _OK:
        await response.body.close()
        raise HttpStatusError(response.status, _OK)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def ping(
    endpoint: Endpoint,
    *,
    host_name: str = _DEFAULT_HOST_NAME,
    timeout: float | None = None,
) -> str:
    """Ping the daemon.

    Returns:
        The response text, ``"OK"`` for a healthy daemon.

    """
    response = await request(endpoint, "GET", "/_ping", host_name=host_name, timeout=timeout)
    await _expect_ok(response)
    async with response.body as body:
        payload = await body.read()
    return payload.decode("ascii", errors="replace").strip()


async def list_images(
    endpoint: Endpoint,
    *,
    host_name: str = _DEFAULT_HOST_NAME,
    timeout: float | None = None,
) -> list[Image]:
    """List local images.

    Uses ``GET /images/json``.  The body is read until the daemon closes
    the connection and then decoded as one JSON array.

    Raises:
        HttpStatusError: If the daemon does not answer 200.  The body is
            not read in that case.
        DecodeError: If the body is not a JSON array of image objects.

    """
    response = await request(
        endpoint, "GET", "/images/json", host_name=host_name, timeout=timeout
    )
    await _expect_ok(response)
    async with response.body as body:
        payload = await body.read()
    images = decode_images(payload)
    logger.debug("decoded %d images", len(images))
    return images


async def pull_image(
    endpoint: Endpoint,
    name: str,
    *,
    host_name: str = _DEFAULT_HOST_NAME,
    timeout: float | None = None,
) -> AsyncPullStream:
    """Start pulling an image and return its progress stream.

    Uses ``POST /images/create?fromImage={name}``.  Each item of the
    returned stream is one chunk of the response body; for the Docker
    engine that is one JSON progress object.

    Args:
        endpoint: Daemon address.
        name: Image reference, e.g. ``redis:latest``.
        host_name: Value for the ``Host`` header.
        timeout: Per-read deadline in seconds. ``None`` = block indefinitely.

    Raises:
        HttpStatusError: If the daemon does not answer 200.

    """
    quoted = urllib.parse.quote(name, safe=":/@")
    response = await request(
        endpoint,
        "POST",
        f"/images/create?fromImage={quoted}",
        host_name=host_name,
        timeout=timeout,
    )
    await _expect_ok(response)
    return AsyncPullStream(name, response.body)
