from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from film_browser.config.loader import load_global_config
from film_browser.config.model import GlobalConfig
from film_browser.core.orchestrator import LOADING_MESSAGE, LoadResult, load_records, readiness
from film_browser.core.view_registry import ViewRegistry
from film_browser.ui.callbacks.callbacks_io import register_io_callbacks
from film_browser.ui.callbacks.callbacks_render import (
    register_hover_callbacks,
    register_render_callbacks,
)
from film_browser.ui.callbacks.callbacks_sync import register_sync_callbacks
from film_browser.ui.config import AppConfig
from film_browser.ui.layout.build_layout import DASHBOARD_VIEW_ID, SCATTER_VIEW_ID, build_layout

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from film_browser.views import DashboardView, ScatterView

    registry = ViewRegistry()
    registry.register(ScatterView)
    registry.register(DashboardView)
    return registry


def build_app_config(
    config_root: Path,
    global_config: GlobalConfig,
    load: LoadResult,
) -> AppConfig:
    registry = _build_view_registry()
    geometries = {
        SCATTER_VIEW_ID: global_config.scatter_geometry,
        DASHBOARD_VIEW_ID: global_config.dashboard_geometry,
    }

    views = {}
    statuses = {}
    for view_cls in registry.all_classes():
        view = registry.create(view_cls.id, load.records, geometries.get(view_cls.id))
        views[view.id] = view
        statuses[view.id] = readiness(load, view.filter_profile)
        logger.info(
            "view_ready",
            extra={"view_id": view.id, "status": statuses[view.id].kind.value},
        )

    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        load=load,
        registry=registry,
        views=views,
        readiness=statuses,
    )
    ctx.validate()
    return ctx


def create_dash_app(
    config_root: Path | str = Path("config"),
    load: Optional[LoadResult] = None,
) -> Dash:
    """
    Build the Dash app from `config_root`/global.json.

    Without `load`, the data file is read once through `asyncio.run`, which
    cannot be nested in an already running event loop (a notebook, an async
    server). There, await `load_records(...)` yourself and pass the result as
    `load`.
    """
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initial data load (single attempt; failures become a status, not an exception)
    if load is None:
        logger.info(LOADING_MESSAGE, extra={"path": str(global_config.data_path)})
        load = asyncio.run(load_records(global_config.data_path))

    # 3) App Context
    ctx = build_app_config(config_root, global_config, load)

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks only for views that have something to show
    if ctx.is_ready(SCATTER_VIEW_ID):
        register_hover_callbacks(app, ctx)
    if ctx.is_ready(DASHBOARD_VIEW_ID):
        register_sync_callbacks(app, ctx)
        register_render_callbacks(app, ctx)
        register_io_callbacks(app, ctx)

    return app
