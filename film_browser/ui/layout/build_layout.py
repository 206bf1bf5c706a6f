from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from film_browser.ui.helpers import status_line
from film_browser.ui.ids import IDs
from film_browser.ui.layout.build_filter_panel import build_filter_panel
from film_browser.ui.layout.build_navbar import build_navbar
from film_browser.ui.layout.build_plot_panel import build_plot_panel
from film_browser.ui.layout.build_scatter_panel import build_scatter_panel
from film_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from film_browser.ui.config import AppConfig

SCATTER_VIEW_ID = "scatter"
DASHBOARD_VIEW_ID = "dashboard"


def build_dashboard_tab(ctx: AppConfig) -> list:
    readiness = ctx.readiness[DASHBOARD_VIEW_ID]
    if readiness.is_error:
        # Terminal state: nothing is wired up, only the diagnostic is shown.
        return [dbc.Row(dbc.Col(status_line(readiness, IDs.Control.DASHBOARD_STATUS), className="mt-3"))]

    view = ctx.view(DASHBOARD_VIEW_ID)
    view_ctx = view.context()

    return [
        dcc.Store(
            id=IDs.Store.DASHBOARD_STATE,
            storage_type="memory",
            data={"state": view_ctx.to_store(), "render": "full"},
        ),
        dbc.Row(
            [
                dbc.Col(build_filter_panel(view, view_ctx), md=3, className="mt-3"),
                dbc.Col(
                    [
                        build_plot_panel(view, view_ctx),
                        build_table_panel(ctx.global_config.table_limit),
                    ],
                    md=9,
                    className="mt-3",
                ),
            ]
        ),
    ]


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.global_config)

    scatter_panel = build_scatter_panel(
        ctx.view(SCATTER_VIEW_ID),
        ctx.readiness[SCATTER_VIEW_ID],
    )

    return dbc.Container(
        fluid=True,
        className="fb-root",
        children=[
            navbar,
            dcc.Tabs(
                id=IDs.Control.PAGE_TABS,
                value=DASHBOARD_VIEW_ID,
                children=[
                    dcc.Tab(
                        label=ctx.view(SCATTER_VIEW_ID).label,
                        value=SCATTER_VIEW_ID,
                        children=[scatter_panel],
                    ),
                    dcc.Tab(
                        label=ctx.view(DASHBOARD_VIEW_ID).label,
                        value=DASHBOARD_VIEW_ID,
                        children=build_dashboard_tab(ctx),
                    ),
                ],
            ),
        ],
    )
