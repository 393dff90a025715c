# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Async public API for dockwire.

Usage::

    from dockwire.async_ import AsyncDaemonClient

    async def main():
        client = AsyncDaemonClient()
        for image in await client.list_images():
            print(image.id)
"""

from __future__ import annotations

from dockwire._async_client import AsyncDaemonClient
from dockwire._chunked import iter_chunks
from dockwire._http import Response, ResponseBody
from dockwire._pull import AsyncPullStream
from dockwire._socket_client import list_images, ping, pull_image, request

__all__ = [
    "AsyncDaemonClient",
    "AsyncPullStream",
    "Response",
    "ResponseBody",
    "iter_chunks",
    "list_images",
    "ping",
    "pull_image",
    "request",
]
