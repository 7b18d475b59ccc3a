"""Locate and read a graphz site's ``graphz.toml``.

A site is the directory holding ``graphz.toml``; its ``.graphz/`` data
directory (database, local storage) sits beside the file.  ``GRAPHZ_CONFIG``
or ``--config`` name the file directly and skip the walk-up.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from graphzlive.config.models import GraphzConfig

CONFIG_FILENAME = "graphz.toml"
CONFIG_ENV_VAR = "GRAPHZ_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) to the nearest graphz.toml.

    ``GRAPHZ_CONFIG`` wins when set; a path there that is not a file means
    no config at all rather than falling back to the walk-up.
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


def resolve_site(
    *,
    config_path: str | None = None,
    site_root: Path | None = None,
) -> tuple[Path, Path | None]:
    """Return ``(site_root, toml_path)`` for one invocation.

    An explicit *config_path* that does not exist means no TOML file.  Without
    an explicit *site_root* the site is the config file's directory, or the
    current directory when there is no config.
    """
    toml_path: Path | None
    if config_path:
        p = Path(config_path)
        toml_path = p if p.is_file() else None
    else:
        toml_path = find_config(site_root)

    if site_root is None:
        site_root = toml_path.parent if toml_path else Path.cwd()
    return site_root, toml_path


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* and check its sections before they reach the settings.

    Raises:
        click.ClickException: The file is not valid TOML, or a section holds
            a value of the wrong type.  The message names the file.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        GraphzConfig.model_validate(data)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
    except ValidationError as exc:
        msg = f"Invalid settings in {path}: {exc}"
        raise click.ClickException(msg) from exc
    return data
