from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from film_browser.config.model import (
    ChartGeometry,
    DASHBOARD_GEOMETRY,
    GlobalConfig,
    SCATTER_GEOMETRY,
)
from film_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DATA_PATH_ENV = "FILM_BROWSER_DATA_PATH"
DEFAULT_DATA_PATH = Path("data") / "films.csv"


def _geometry(raw_global: Dict[str, Any], key: str, default: ChartGeometry) -> ChartGeometry:
    raw = raw_global.get(key)
    if raw is None:
        return default
    if not isinstance(raw, dict) or not isinstance(raw.get("margin", {}), dict):
        raise ConfigError(f"'{key}' must be an object with optional width/height/margin")
    try:
        return ChartGeometry.from_raw(raw, default)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid '{key}': {e}") from e


def _resolve(root: Path, raw_path: str | Path) -> Path:
    # Absolute paths are used as-is; relative ones are resolved against the config root.
    path = Path(raw_path)
    return path if path.is_absolute() else (root / path).resolve()


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    global.json keys (all optional):

    - ui_title: title for UI, defaults to 'Film Browser'
    - subtitle: small text under the title
    - data_path: delimited text file with one film per row, relative to root
    - table_limit: maximum rows in the selection table, defaults to 30
    - scatter_geometry / dashboard_geometry: {"width", "height", "margin": {"top", "right", "bottom", "left"}}

    FILM_BROWSER_DATA_PATH overrides data_path.

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is malformed.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open(encoding="utf-8") as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON in {global_path}: {e}") from e

    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    data_path_raw = os.getenv(DATA_PATH_ENV) or raw_global.get("data_path") or DEFAULT_DATA_PATH

    try:
        table_limit = int(raw_global.get("table_limit", 30))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid 'table_limit': {e}") from e
    if table_limit < 1:
        raise ConfigError("'table_limit' must be at least 1")

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Film Browser"),
        subtitle=raw_global.get("subtitle", GlobalConfig.subtitle),
        data_path=_resolve(root, data_path_raw),
        table_limit=table_limit,
        scatter_geometry=_geometry(raw_global, "scatter_geometry", SCATTER_GEOMETRY),
        dashboard_geometry=_geometry(raw_global, "dashboard_geometry", DASHBOARD_GEOMETRY),
    )
