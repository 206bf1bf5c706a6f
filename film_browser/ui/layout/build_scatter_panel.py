from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from film_browser.core.base_view import BaseView
from film_browser.core.orchestrator import Status
from film_browser.ui.helpers import status_line
from film_browser.ui.ids import IDs


def build_scatter_panel(view: BaseView, readiness: Status) -> dbc.Card:
    """
    Static runtime/rating scatter. When the view is not ready (load failed or
    zero eligible rows) only the status line is shown.
    """
    body = [status_line(readiness, IDs.Control.SCATTER_STATUS)]

    if not readiness.is_error:
        ctx = view.context()
        data = view.timed_compute(ctx)
        body[0] = status_line(ctx.status(), IDs.Control.SCATTER_STATUS)
        body.append(
            dcc.Graph(
                id=IDs.Control.SCATTER_GRAPH,
                figure=view.render_figure(data, ctx),
                clear_on_unhover=True,
                config={"displayModeBar": False},
            )
        )

    return dbc.Card(
        [
            dbc.CardHeader(html.Strong(view.label), className="p-2"),
            dbc.CardBody(body),
        ],
        className="fb-maincard mt-3",
    )
