"""Unit tests for _config.py — configuration loading with precedence."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from dockwire._config import DockwireConfig, _build_config, _merge_yaml, load_config

if TYPE_CHECKING:
    from pathlib import Path

# --- Default config ---


def test_default_config_values() -> None:
    cfg = DockwireConfig()
    assert cfg.host is None
    assert cfg.host_name == "localhost"
    assert cfg.timeout is None
    assert cfg.log_level == "warning"


def test_config_is_frozen() -> None:
    cfg = DockwireConfig()
    with pytest.raises(AttributeError):
        cfg.host = "changed"  # type: ignore[misc]


# --- load_config ---


def test_load_config_no_files_returns_defaults(tmp_path: Path) -> None:
    with patch("dockwire._config.Path.home", return_value=tmp_path):
        cfg = load_config()
    assert cfg == DockwireConfig()


def test_load_config_install_level(tmp_path: Path) -> None:
    install_dir = tmp_path / ".dockwire"
    install_dir.mkdir()
    (install_dir / "dockwire.yaml").write_text(
        "host: unix:///custom/docker.sock\ntimeout: 5\n"
    )

    with patch("dockwire._config.Path.home", return_value=tmp_path):
        cfg = load_config()

    assert cfg.host == "unix:///custom/docker.sock"
    assert cfg.timeout == 5.0
    assert isinstance(cfg.timeout, float)


def test_load_config_explicit_file_overrides_install(tmp_path: Path) -> None:
    install_dir = tmp_path / "home" / ".dockwire"
    install_dir.mkdir(parents=True)
    (install_dir / "dockwire.yaml").write_text("host: unix:///a.sock\nlog_level: debug\n")

    explicit = tmp_path / "override.yaml"
    explicit.write_text("host: tcp://127.0.0.1:2375\n")

    with patch("dockwire._config.Path.home", return_value=tmp_path / "home"):
        cfg = load_config(explicit)

    assert cfg.host == "tcp://127.0.0.1:2375"  # explicit wins
    assert cfg.log_level == "debug"  # install-level inherited


def test_load_config_missing_explicit_file(tmp_path: Path) -> None:
    with patch("dockwire._config.Path.home", return_value=tmp_path):
        cfg = load_config(tmp_path / "absent.yaml")
    assert cfg == DockwireConfig()


def test_load_config_logging_section(tmp_path: Path) -> None:
    path = tmp_path / "dockwire.yaml"
    path.write_text("logging:\n  level: info\n")

    with patch("dockwire._config.Path.home", return_value=tmp_path / "nowhere"):
        cfg = load_config(path)
    assert cfg.log_level == "info"


# --- _merge_yaml ---


def test_merge_yaml_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(": invalid: yaml: {[")

    target: dict[str, object] = {}
    _merge_yaml(target, path)
    assert target == {}


def test_merge_yaml_non_dict(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- item1\n- item2\n")

    target: dict[str, object] = {}
    _merge_yaml(target, path)
    assert target == {}


# --- _build_config ---


def test_build_config_filters_unknown_keys() -> None:
    cfg = _build_config({"host_name": "engine", "unknown_key": "ignored"})
    assert cfg.host_name == "engine"


def test_build_config_empty() -> None:
    assert _build_config({}) == DockwireConfig()


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"timeout": "soon"}, "timeout"),
        ({"timeout": True}, "timeout"),
        ({"timeout": None}, "timeout"),
        ({"log_level": 10}, "log_level"),
        ({"host": 5}, "host"),
        ({"host_name": ["a", "b"]}, "host_name"),
    ],
)
def test_build_config_drops_wrong_types(overrides: dict[str, object], field: str) -> None:
    cfg = _build_config(overrides)
    assert getattr(cfg, field) == getattr(DockwireConfig(), field)


def test_load_config_bad_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "dockwire.yaml"
    path.write_text("timeout: soon\nhost_name: engine\nlogging:\n  level: 10\n")

    with patch("dockwire._config.Path.home", return_value=tmp_path / "nowhere"):
        cfg = load_config(path)
    assert cfg.timeout is None
    assert cfg.log_level == "warning"
    assert cfg.host_name == "engine"
