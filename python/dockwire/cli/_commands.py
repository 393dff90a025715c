# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI command implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from dockwire import DaemonClient
    from dockwire.cli.main import CliContext

from dockwire.cli._output import (
    format_error,
    format_image_list,
    format_progress_event,
    print_success,
)


def _get_ctx(ctx: click.Context) -> CliContext:
    """Extract the CliContext from Click's context object."""
    return ctx.obj  # type: ignore[no-any-return]


def _make_client(cli_ctx: CliContext) -> DaemonClient:
    """Build a client from the CLI options. Raises SystemExit on a bad address."""
    import dockwire  # noqa: PLC0415

    try:
        return dockwire.DaemonClient(
            cli_ctx.host,
            timeout=cli_ctx.timeout,
            config=cli_ctx.config,
        )
    except dockwire.DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc


@click.command("images")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def images_cmd(ctx: click.Context, *, json_output: bool) -> None:
    """List local images."""
    import dockwire  # noqa: PLC0415

    client = _make_client(_get_ctx(ctx))
    try:
        images = client.list_images()
    except dockwire.DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    format_image_list(images, json_output=json_output)


@click.command("pull")
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Print raw JSON progress events.")
@click.pass_context
def pull_cmd(ctx: click.Context, name: str, *, json_output: bool) -> None:
    """Pull an image, printing progress as it arrives."""
    import dockwire  # noqa: PLC0415

    client = _make_client(_get_ctx(ctx))
    failed = False
    try:
        with client.pull_image(name) as stream:
            for event in stream.iter_events():
                format_progress_event(event, json_output=json_output)
                failed = failed or not event.ok
    except dockwire.DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    if failed:
        raise SystemExit(1)
    if not json_output:
        print_success(f"Pulled {name}")


@click.command("ping")
@click.pass_context
def ping_cmd(ctx: click.Context) -> None:
    """Check that the daemon answers."""
    import dockwire  # noqa: PLC0415

    client = _make_client(_get_ctx(ctx))
    try:
        answer = client.ping()
    except dockwire.DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    print_success(f"{client.endpoint}: {answer}")
