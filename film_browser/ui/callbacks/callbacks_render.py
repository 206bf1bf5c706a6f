from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
import plotly.graph_objs as go
from dash import Input, Output, Patch

from film_browser.core.orchestrator import RenderInstruction
from film_browser.ui.helpers import status_style, year_labels
from film_browser.ui.ids import IDs
from film_browser.views.scatter_view import hover_sizes

if TYPE_CHECKING:
    from film_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

DASHBOARD_VIEW_ID = "dashboard"
SCATTER_VIEW_ID = "scatter"


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this view.", details)


def emphasis_patch(data) -> Patch:
    """Restyle the existing points without replacing the figure (keeps the brush box)."""
    patched = Patch()
    patched["data"][0]["marker"]["opacity"] = list(data["opacity"])
    patched["data"][0]["marker"]["line"]["width"] = list(data["stroke_width"])
    return patched


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    view = ctx.view(DASHBOARD_VIEW_ID)
    table_limit = ctx.global_config.table_limit

    # ---------------------------------------------------------
    # Dashboard state -> figure, table, status, year labels
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DASHBOARD_GRAPH, "figure"),
        Output(IDs.Control.RESULT_TABLE, "data"),
        Output(IDs.Control.DASHBOARD_STATUS, "children"),
        Output(IDs.Control.DASHBOARD_STATUS, "style"),
        Output(IDs.Control.YEAR_MIN_LABEL, "children"),
        Output(IDs.Control.YEAR_MAX_LABEL, "children"),
        Input(IDs.Store.DASHBOARD_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_dashboard_from_state(store: dict[str, Any] | None):
        if not store:
            figure = _message_figure("No data loaded.")
            return figure, [], "", {}, "—", "—"

        instruction = RenderInstruction(store.get("render", RenderInstruction.FULL.value))
        try:
            view_ctx = view.restore(store["state"])
        except Exception:
            logger.exception("Invalid dashboard state in render callback: %r", store)
            return _error_figure("Internal error: invalid dashboard state."), [], "", {}, "—", "—"

        status = view_ctx.status()
        lo_label, hi_label = year_labels(view_ctx.state)
        table = view_ctx.synced(table_limit).table

        if instruction is RenderInstruction.NONE:
            return dash.no_update, dash.no_update, dash.no_update, dash.no_update, lo_label, hi_label

        try:
            data = view.timed_compute(view_ctx)
            if instruction is RenderInstruction.EMPHASIS and not data.empty:
                figure = emphasis_patch(data)
            else:
                figure = view.render_figure(data, view_ctx)
        except Exception:
            logger.exception(
                "Error in update_dashboard_from_state",
                extra={"dashboard_state": store.get("state")},
            )
            figure = _error_figure(
                "The app hit an unexpected error. "
                "If this keeps happening, grab the logs and open an issue."
            )

        return figure, table, status.message, status_style(status), lo_label, hi_label


def register_hover_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    n_points = len(ctx.view(SCATTER_VIEW_ID).context().filtered)

    # ---------------------------------------------------------
    # Static scatter: enlarge the hovered point, restore on leave
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SCATTER_GRAPH, "figure"),
        Input(IDs.Control.SCATTER_GRAPH, "hoverData"),
        prevent_initial_call=True,
    )
    def update_scatter_hover(hover_data: dict | None):
        hovered = None
        if hover_data and hover_data.get("points"):
            hovered = hover_data["points"][0].get("pointIndex")
        patched = Patch()
        patched["data"][0]["marker"]["size"] = hover_sizes(n_points, hovered)
        return patched
