from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from film_browser.core.base_view import BaseView
from film_browser.core.orchestrator import ViewContext
from film_browser.ui.helpers import status_line
from film_browser.ui.ids import IDs


def build_plot_panel(view: BaseView, ctx: ViewContext) -> dbc.Card:
    data = view.timed_compute(ctx)
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong(view.label),
                        dbc.Button(
                            "Clear selection",
                            id=IDs.Control.CLEAR_SELECTION_BTN,
                            color="secondary",
                            size="sm",
                            outline=True,
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    status_line(ctx.status(), IDs.Control.DASHBOARD_STATUS),
                    dcc.Graph(
                        id=IDs.Control.DASHBOARD_GRAPH,
                        figure=view.render_figure(data, ctx),
                        config={"displayModeBar": True, "modeBarButtonsToRemove": ["lasso2d"]},
                    ),
                ],
                className="fb-main-body",
            ),
        ],
        className="fb-maincard",
    )
