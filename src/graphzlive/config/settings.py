"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``GRAPHZ_*`` prefix
  3. TOML file    — ``graphz.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery and section checks from
:mod:`graphzlive.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from graphzlive.config.discovery import read_config, resolve_site
from graphzlive.config.models import (
    AnalyticsConfig,
    CatalogConfig,
    CommentsConfig,
    DonationConfig,
    SiteConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``graphz.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GraphzSettings(BaseSettings):
    """Unified settings for the whole graphz CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~graphzlive.commands._context.AppContext` at the CLI root.

    Attributes:
        site_root: Directory holding ``.graphz/`` (parent of ``graphz.toml``,
            or CWD if no config found).
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GRAPHZ_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    site: SiteConfig = Field(default_factory=SiteConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    donation: DonationConfig = Field(default_factory=DonationConfig)

    @property
    def data_dir(self) -> Path:
        """``{site_root}/.graphz`` — database and local storage live here."""
        return self.site_root / ".graphz"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> GraphzSettings:
        """Construct settings from CLI invocation.

        Discovers ``graphz.toml`` via walk-up (or explicit *config_path*),
        resolves *site_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        resolved_root, toml_path = resolve_site(config_path=config_path, site_root=site_root)

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
