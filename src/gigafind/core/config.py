"""Central configuration and constants for ``gigafind``.

Settings may come from a TOML file with a ``[gigafind]`` table::

    [gigafind]
    path = "/srv"
    minimum_file_size = "1G"
    exclude = ["*/cache/*"]
    google_chat = "https://chat.googleapis.com/v1/spaces/..."
    host = "web-01"

Command-line values always win over file values.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from gigafind._meta import logger
from gigafind.errors import ConfigError

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

SETTINGS_TABLE = "gigafind"
LOCAL_SETTINGS_FILE = "gigafind.toml"


@dataclass(frozen=True, slots=True)
class Settings:
    """Values read from a settings file; ``None`` means "not set"."""

    path: str | None = None
    minimum_file_size: str | None = None
    minimum_dir_size: str | None = None
    minimum_file_count: int | None = None
    exclude: tuple[str, ...] = field(default_factory=tuple)
    google_chat: str | None = None
    host: str | None = None
    on_duplicate: str | None = None


_STRING_KEYS = {"path", "minimum_file_size", "minimum_dir_size", "google_chat", "host", "on_duplicate"}


def _coerce(source: Path, table: dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(table) - known)
    if unknown:
        msg = f"{source}: unknown setting(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    values: dict[str, Any] = {}
    for key, value in table.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str):
                msg = f"{source}: {key} must be a string"
                raise ConfigError(msg)
            values[key] = value
        elif key == "minimum_file_count":
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{source}: minimum_file_count must be an integer"
                raise ConfigError(msg)
            values[key] = value
        elif key == "exclude":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                msg = f"{source}: exclude must be a list of strings"
                raise ConfigError(msg)
            values[key] = tuple(value)
    return Settings(**values)


def load_settings(path: Path) -> Settings:
    """Read the ``[gigafind]`` table from *path*."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        msg = f"cannot read settings file {path}: {exc}"
        raise ConfigError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"invalid settings file {path}: {exc}"
        raise ConfigError(msg) from exc

    table = data.get(SETTINGS_TABLE, {})
    if not isinstance(table, dict):
        msg = f"{path}: [{SETTINGS_TABLE}] must be a table"
        raise ConfigError(msg)
    logger.debug("loaded settings from %s", path)
    return _coerce(path, table)


def discover_settings_file(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Path | None:
    """Locate the settings file.

    Order: *explicit* (must exist), ``./gigafind.toml``,
    ``$XDG_CONFIG_HOME/gigafind/config.toml`` (``~/.config`` when unset).
    """
    if explicit is not None:
        if not explicit.is_file():
            msg = f"settings file not found: {explicit}"
            raise ConfigError(msg)
        return explicit

    env = os.environ if environ is None else environ
    local = (cwd or Path.cwd()) / LOCAL_SETTINGS_FILE
    if local.is_file():
        return local

    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    user = base / "gigafind" / "config.toml"
    if user.is_file():
        return user
    return None


def resolve_settings(
    explicit: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    path = discover_settings_file(explicit, cwd=cwd, environ=environ)
    if path is None:
        return Settings()
    return load_settings(path)


__all__ = [
    "LOCAL_SETTINGS_FILE",
    "LOG_FORMAT",
    "Settings",
    "discover_settings_file",
    "load_settings",
    "resolve_settings",
]
