# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Quickstart: list local images, then pull one.

Talks to the daemon named by ``DOCKER_HOST`` (default
``unix:///var/run/docker.sock``).  Any error ends the script with a
non-zero exit status.

Usage:
    python examples/quickstart_images.py [IMAGE]
"""

import sys

import dockwire


def main() -> None:
    client = dockwire.connect_with_defaults()
    print(f"Daemon at {client.endpoint}")

    for image in client.list_images():
        tags = ", ".join(image.repo_tags or ("<none>",))
        print(f"  {image.short_id}  {tags}")

    name = sys.argv[1] if len(sys.argv) > 1 else "redis:latest"
    print(f"\nPull: {name}")
    with client.pull_image(name) as stream:
        for event in stream.iter_events():
            print(f"  {event}")
            if not event.ok:
                sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except dockwire.DockwireError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
