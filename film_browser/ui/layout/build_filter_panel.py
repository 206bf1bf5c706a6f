from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from film_browser.core.base_view import BaseView
from film_browser.core.filter_engine import year_bounds
from film_browser.core.orchestrator import ViewContext
from film_browser.ui.helpers import (
    director_dropdown_options,
    metric_dropdown_options,
    year_labels,
)
from film_browser.ui.ids import IDs


def build_filter_panel(view: BaseView, ctx: ViewContext) -> dbc.Card:
    state = ctx.state
    bounds = year_bounds(view.records)
    y_lo, y_hi = bounds if bounds is not None else (0, 0)
    lo_label, hi_label = year_labels(state)

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("X axis", className="form-label"),
                    dcc.Dropdown(
                        id=IDs.Control.METRIC_SELECT,
                        options=metric_dropdown_options(),
                        value=state.metric,
                        clearable=False,
                        className="mb-3",
                    ),
                    html.Label("Director", className="form-label"),
                    dcc.Dropdown(
                        id=IDs.Control.DIRECTOR_SELECT,
                        options=director_dropdown_options(view.records),
                        value=state.director,
                        clearable=False,
                        className="mb-3",
                    ),
                    html.Label(
                        [
                            "Years ",
                            html.Span(lo_label, id=IDs.Control.YEAR_MIN_LABEL),
                            " – ",
                            html.Span(hi_label, id=IDs.Control.YEAR_MAX_LABEL),
                        ],
                        className="form-label",
                    ),
                    dcc.Slider(
                        id=IDs.Control.YEAR_MIN,
                        min=y_lo,
                        max=y_hi,
                        step=1,
                        value=state.year_min,
                        marks=None,
                        tooltip={"placement": "bottom"},
                        updatemode="drag",
                    ),
                    dcc.Slider(
                        id=IDs.Control.YEAR_MAX,
                        min=y_lo,
                        max=y_hi,
                        step=1,
                        value=state.year_max,
                        marks=None,
                        tooltip={"placement": "bottom"},
                        updatemode="drag",
                    ),
                ]
            ),
        ],
        className="fb-sidebar",
    )
