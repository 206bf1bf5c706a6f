from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import Input, Output, State, exceptions

from film_browser.core.exceptions import ReentrantDispatchError
from film_browser.core.orchestrator import (
    BackgroundCleared,
    BrushCommitted,
    DirectorChanged,
    Event,
    MetricChanged,
    Orchestrator,
    ViewContext,
    YearBoundChanged,
)
from film_browser.core.selection import BrushRect
from film_browser.ui.ids import IDs

if TYPE_CHECKING:
    from film_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

DASHBOARD_VIEW_ID = "dashboard"


def brush_from_selected_data(selected: Optional[dict], view_ctx: ViewContext) -> Optional[BrushRect]:
    """
    Pixel rectangle for a plotly box selection, or None for a deselect
    (double-click on the background) or a selection without a box.
    """
    if not selected or view_ctx.scales is None:
        return None
    box = selected.get("range")
    if not box or "x" not in box or "y" not in box:
        return None
    return BrushRect.from_data_range(box["x"], box["y"], view_ctx.scales)


def build_event(triggered_id: Optional[str], inputs: dict[str, Any], view_ctx: ViewContext) -> Optional[Event]:
    """
    Pure helper: translate the control that fired into one update event.
    Returns None when the trigger carries no usable value.
    """
    if triggered_id == IDs.Control.METRIC_SELECT:
        metric = inputs.get("metric")
        return MetricChanged(metric) if metric else None

    if triggered_id == IDs.Control.DIRECTOR_SELECT:
        return DirectorChanged(inputs.get("director"))

    if triggered_id in (IDs.Control.YEAR_MIN, IDs.Control.YEAR_MAX):
        key = "year_min" if triggered_id == IDs.Control.YEAR_MIN else "year_max"
        value = inputs.get(key)
        if value is None:
            return None
        return YearBoundChanged("min" if key == "year_min" else "max", float(value))

    if triggered_id == IDs.Control.DASHBOARD_GRAPH:
        selected = inputs.get("selected")
        # Clicks on a point (or a lasso) report points without a box range: not a brush.
        if selected and "range" not in selected:
            return None
        return BrushCommitted(brush_from_selected_data(selected, view_ctx))

    if triggered_id == IDs.Control.CLEAR_SELECTION_BTN:
        return BackgroundCleared()

    return None


def register_sync_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    view = ctx.view(DASHBOARD_VIEW_ID)

    # ---------------------------------------------------------
    # Controls / brush -> dashboard state
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DASHBOARD_STATE, "data"),
        Input(IDs.Control.METRIC_SELECT, "value"),
        Input(IDs.Control.DIRECTOR_SELECT, "value"),
        Input(IDs.Control.YEAR_MIN, "value"),
        Input(IDs.Control.YEAR_MAX, "value"),
        Input(IDs.Control.DASHBOARD_GRAPH, "selectedData"),
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        State(IDs.Store.DASHBOARD_STATE, "data"),
        prevent_initial_call=True,
    )
    def sync_dashboard_state(metric, director, year_min, year_max, selected, _n_clicks, store):
        view_ctx = view.restore(store["state"]) if store else view.context()

        event = build_event(
            dash.ctx.triggered_id,
            {
                "metric": metric,
                "director": director,
                "year_min": year_min,
                "year_max": year_max,
                "selected": selected,
            },
            view_ctx,
        )
        if event is None:
            raise exceptions.PreventUpdate

        orchestrator = Orchestrator(view_ctx)
        try:
            instruction = orchestrator.dispatch(event)
        except ReentrantDispatchError:
            logger.exception("Re-entrant dispatch", extra={"event": type(event).__name__})
            raise exceptions.PreventUpdate

        logger.info(
            "dashboard_event",
            extra={
                "event": type(event).__name__,
                "render": instruction.value,
                "n_visible": len(orchestrator.ctx.filtered),
                "n_selected": len(orchestrator.ctx.selection.keys),
            },
        )
        return {"state": orchestrator.ctx.to_store(), "render": instruction.value}
