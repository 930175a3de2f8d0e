"""Locate and read ``pomoctl.toml``.

Resolution order for the config file: ``--config`` flag, the
``POMOCTL_CONFIG`` env var, then a walk up from the state directory (or
CWD) the way git finds ``.git/``. The directory holding the discovered
file becomes the state root unless ``--state-dir`` names one.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "pomoctl.toml"
CONFIG_ENV_VAR = "POMOCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for pomoctl.toml.

    An env override that points at a missing file disables discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(
    config_path: str | Path | None = None,
    state_root: Path | None = None,
) -> tuple[Path | None, Path]:
    """Return ``(toml_path, state_root)`` for one invocation.

    An explicit *config_path* that does not exist yields no config file;
    it never falls back to discovery.
    """
    toml_path: Path | None
    if config_path:
        p = Path(config_path)
        toml_path = p if p.is_file() else None
    else:
        toml_path = find_config(state_root)

    if state_root is None:
        state_root = toml_path.parent if toml_path else Path.cwd()
    return toml_path, state_root


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse the TOML at *path* into a raw table (empty when absent).

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
