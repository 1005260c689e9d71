"""Configuration loading: TOML files, env var overrides, merge logic.

Sources, lowest priority first:
    1. Pydantic model defaults
    2. ``$XDG_CONFIG_HOME/qanda/config.toml`` (``~/.config`` fallback)
    3. ``./qanda.toml``
    4. the file named by ``$QANDA_CONFIG``
    5. the ``path`` argument
    6. single-value environment variables (``ENV_OVERRIDES``)
    7. programmatic ``overrides``
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import pydantic

from qanda.core.errors import ConfigError

from .schema import QandaConfig

CONFIG_PATH_ENV = "QANDA_CONFIG"

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "QANDA_DATABASE_URL": ("database", "url"),
    "QANDA_LOG_LEVEL": ("logging", "level"),
}


def _candidate_files() -> list[Path]:
    """Implicit config locations that are used only if present."""
    xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(xdg) / "qanda" / "config.toml", Path.cwd() / "qanda.toml"]


def _required_file(path: str | Path, missing: str) -> Path:
    p = Path(path)
    if not p.is_file():
        raise ConfigError(missing)
    return p


def _config_files(path: str | Path | None) -> list[Path]:
    """Return config files in merge order (first = lowest priority)."""
    files = [p for p in _candidate_files() if p.is_file()]

    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        files.append(
            _required_file(
                env_path, f"{CONFIG_PATH_ENV} points to non-existent file: {env_path}"
            )
        )
    if path is not None:
        files.append(_required_file(path, f"Config file not found: {path}"))
    return files


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _env_layer() -> dict[str, Any]:
    """Collect set environment overrides into a nested config dict."""
    layer: dict[str, dict[str, str]] = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value:
            layer.setdefault(section, {})[key] = value
    return layer


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> QandaConfig:
    """Load and validate configuration.

    Raises:
        ConfigError: On invalid TOML, missing files, or validation failure.
    """
    layers = [_read_toml(p) for p in _config_files(path)]
    layers.append(_env_layer())
    layers.append(overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _deep_merge(merged, layer)

    try:
        return QandaConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e
