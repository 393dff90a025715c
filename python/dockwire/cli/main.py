# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI entry point for dockwire."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from dockwire import __version__
from dockwire._config import DockwireConfig, load_config


@dataclasses.dataclass
class CliContext:
    """Shared state passed through Click's context object."""

    host: str | None = None
    timeout: float | None = None
    verbose: bool = False
    config: DockwireConfig = dataclasses.field(default_factory=DockwireConfig)


def _configure_logging(level_name: str, *, verbose: bool) -> None:
    """Route library log records to stderr through rich."""
    level = logging.getLevelName(str(level_name).upper())
    if verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.option(
    "--host",
    "-H",
    envvar="DOCKER_HOST",
    default=None,
    help="Daemon address, e.g. unix:///var/run/docker.sock.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Per-read deadline in seconds (default: wait forever).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Extra YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="dockwire")
@click.pass_context
def cli(
    ctx: click.Context,
    host: str | None,
    timeout: float | None,
    config_path: Path | None,
    *,
    verbose: bool,
) -> None:
    """Talk to the Docker engine over its local socket."""
    config = load_config(config_path)
    _configure_logging(config.log_level, verbose=verbose)
    ctx.obj = CliContext(host=host, timeout=timeout, verbose=verbose, config=config)


# --- Register commands ---

from dockwire.cli._commands import images_cmd, ping_cmd, pull_cmd  # noqa: E402

cli.add_command(images_cmd)
cli.add_command(pull_cmd)
cli.add_command(ping_cmd)
