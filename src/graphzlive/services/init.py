"""InitService — create a graphz site directory.

Writes a starter ``graphz.toml`` (only if none exists) and creates
``.graphz/`` with the database.  Safe to re-run on an existing site.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from graphzlive.config.discovery import CONFIG_FILENAME
from graphzlive.config.settings import GraphzSettings
from graphzlive.infrastructure.store import GRAPHS, StoreError
from graphzlive.infrastructure.workspace import Workspace
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)

_STARTER_CONFIG = """\
# graphz site configuration

[site]
name = "{name}"
base_url = "{base_url}"

[catalog]
popular_tags_limit = 10
top_graphs_limit = 5

[analytics]
enabled = true
capacity = 100
"""


class InitService:
    """Site bootstrap. Static: it runs before any Workspace exists."""

    @staticmethod
    @traced
    def init_site(root: Path, *, name: str | None = None) -> ServiceResult:
        op = "init_site"
        files_created: list[str] = []
        config_path = root / CONFIG_FILENAME
        try:
            root.mkdir(parents=True, exist_ok=True)
            if not config_path.exists():
                defaults = GraphzSettings(site_root=root).site
                config_path.write_text(
                    _STARTER_CONFIG.format(name=name or defaults.name, base_url=defaults.base_url),
                    encoding="utf-8",
                )
                files_created.append(CONFIG_FILENAME)
        except OSError as exc:
            logger.error("Cannot initialize site at %s: %s", root, exc)
            return failure(op, "INIT_FAILED", f"Cannot initialize site at {root}: {exc}")

        settings = GraphzSettings.from_cli(site_root=root, config_path=str(config_path))
        try:
            workspace = Workspace(settings)
        except (OSError, SQLAlchemyError) as exc:
            logger.error("Cannot create database under %s: %s", settings.data_dir, exc)
            return failure(op, "INIT_FAILED", f"Cannot create database: {exc}")
        try:
            graphs = workspace.store.count_docs(GRAPHS)
        except StoreError:
            graphs = 0
        finally:
            workspace.close()

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "site_path": str(root),
                "data_dir": str(settings.data_dir),
                "config": str(config_path),
                "files_created": len(files_created),
                "graphs": graphs,
            },
        )
