# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Configuration loading with defaults -> install-level -> explicit file precedence."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml

_CONFIG_FILENAME = "dockwire.yaml"


@dataclasses.dataclass(frozen=True)
class DockwireConfig:
    """Resolved dockwire configuration."""

    host: str | None = None
    host_name: str = "localhost"
    timeout: float | None = None
    log_level: str = "warning"


def load_config(path: Path | None = None) -> DockwireConfig:
    """Load configuration with precedence: explicit file > install > defaults.

    1. Start with defaults
    2. Overlay install-level ``~/.dockwire/dockwire.yaml`` (if exists)
    3. Overlay the file at *path* (if given and exists)
    """
    overrides: dict[str, Any] = {}

    install_config = Path.home() / ".dockwire" / _CONFIG_FILENAME
    if install_config.is_file():
        _merge_yaml(overrides, install_config)

    if path is not None and path.is_file():
        _merge_yaml(overrides, path)

    return _build_config(overrides)


def _merge_yaml(target: dict[str, Any], path: Path) -> None:
    """Parse a YAML file and merge its values into *target*."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError:
        return
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if key == "logging" and isinstance(value, dict):
            # logging.level -> log_level
            if "level" in value:
                target["log_level"] = value["level"]
        else:
            target[key] = value


_FIELD_TYPES: dict[str, type | tuple[type, ...]] = {
    "host": str,
    "host_name": str,
    "timeout": (int, float),
    "log_level": str,
}


def _build_config(overrides: dict[str, Any]) -> DockwireConfig:
    """Build a ``DockwireConfig`` from a dict of overrides.

    Unknown keys and values of the wrong type are dropped, so the field
    keeps its default.
    """
    filtered = {
        k: v
        for k, v in overrides.items()
        if k in _FIELD_TYPES and isinstance(v, _FIELD_TYPES[k]) and not isinstance(v, bool)
    }
    if "timeout" in filtered:
        filtered["timeout"] = float(filtered["timeout"])
    return DockwireConfig(**filtered)
