# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Rich output formatters for the CLI."""

from __future__ import annotations

import dataclasses
import datetime
import json
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dockwire.errors import DockwireError
    from dockwire.types import Image, ProgressEvent

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

_console = Console()
_err_console = Console(stderr=True)


def format_image_list(images: list[Image], *, json_output: bool = False) -> None:
    """Print images as a rich table or JSON."""
    if json_output:
        click_echo_json([dataclasses.asdict(image) for image in images])
        return

    if not images:
        _console.print("[dim]No images found.[/dim]")
        return

    table = Table(title="Images")
    table.add_column("Repository:Tag", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Created")
    table.add_column("Size", justify="right")
    table.add_column("Containers", justify="right")

    for image in images:
        tags = ", ".join(image.repo_tags) if image.repo_tags else "<none>"
        created = datetime.datetime.fromtimestamp(image.created, tz=datetime.timezone.utc)
        table.add_row(
            tags,
            image.short_id,
            created.strftime("%Y-%m-%d %H:%M"),
            format_size(image.size),
            str(image.containers),
        )

    _console.print(table)


def format_size(size: int) -> str:
    """Render a byte count with a decimal unit, as ``docker images`` does."""
    value = float(size)
    for unit in ("B", "kB", "MB", "GB"):
        if value < 1000:  # noqa: PLR2004
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1000
    return f"{value:.1f}TB"


def format_progress_event(event: ProgressEvent, *, json_output: bool = False) -> None:
    """Print one pull progress message as it arrives."""
    if json_output:
        sys.stdout.write(json.dumps(event.raw) + "\n")
        sys.stdout.flush()
        return
    if event.error:
        _err_console.print(str(event), style="red", markup=False, highlight=False)
        return
    _console.print(str(event), markup=False, highlight=False)


def format_error(err: DockwireError) -> None:
    """Print an SDK error as a rich panel with suggestions."""
    title, suggestion = _error_info(err)
    lines = [str(err)]
    if suggestion:
        lines.append(f"\n[dim]{suggestion}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=f"[red]{title}[/red]",
        expand=False,
    )
    _err_console.print(panel)


def _error_info(err: DockwireError) -> tuple[str, str]:
    """Map an SDK error to a title and suggestion string."""
    from dockwire.errors import (  # noqa: PLC0415
        DecodeError,
        HttpStatusError,
        SocketCommunicationError,
        SocketConnectionError,
        SocketTimeoutError,
        UnsupportedEndpoint,
    )

    if isinstance(err, SocketConnectionError):
        return "Daemon Not Reachable", "Is Docker running? Check DOCKER_HOST or --host."
    if isinstance(err, UnsupportedEndpoint):
        return "Unsupported Address", "Use unix:///path/to/docker.sock or tcp://host:port."
    if isinstance(err, SocketTimeoutError):
        return "Timed Out", "Raise --timeout or check that the daemon is responsive."
    if isinstance(err, SocketCommunicationError):
        return "Protocol Error", ""
    if isinstance(err, HttpStatusError):
        return "Request Failed", ""
    if isinstance(err, DecodeError):
        return "Bad Response", ""
    return "Error", ""


def print_success(msg: str) -> None:
    """Print a success message with a checkmark."""
    _console.print(f"[green]✓[/green] {msg}")


def click_echo_json(data: object) -> None:
    """Serialize data to JSON and echo to stdout."""
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")
