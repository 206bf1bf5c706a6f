from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objs as go

from film_browser.config.model import ChartGeometry, DASHBOARD_GEOMETRY

from .filter_profile import FilterProfile
from .filter_state import FilterState
from .orchestrator import ViewContext, context_from_store, initial_context
from .record import Record
from .selection import record_key
from .view_sync import PLACEHOLDER, format_number, point_emphasis

logger = logging.getLogger(__name__)

POINT_RADIUS = 6
HOVER_RADIUS = 8
POINT_STROKE = "rgba(255,255,255,.18)"
UNTITLED = "(untitled)"

# Ordinal palette for directors; recycled when there are more directors than colours.
DIRECTOR_PALETTE: List[str] = list(px.colors.qualitative.T10) + list(px.colors.qualitative.Set3)

POINT_COLUMNS = [
    "key", "title", "year", "director", "rating", "runtime", "gross",
    "x", "y", "px", "py", "color", "stroke_width", "opacity", "hover",
]


def director_colors(directors: Iterable[Optional[str]]) -> Dict[Optional[str], str]:
    """Sorted distinct directors -> palette colour (missing director sorts last)."""
    distinct = sorted(set(directors), key=lambda d: (d is None, d or ""))
    return {d: DIRECTOR_PALETTE[i % len(DIRECTOR_PALETTE)] for i, d in enumerate(distinct)}


def hover_text(record: Record) -> str:
    runtime = format_number(record.runtime)
    return "<br>".join([
        f"<b>{record.title if record.title is not None else UNTITLED}</b>",
        f"Year: {format_number(record.year)}",
        f"Director: {record.director if record.director is not None else PLACEHOLDER}",
        f"Rating: {format_number(record.rating)}",
        f"Runtime: {runtime if runtime == PLACEHOLDER else runtime + ' min'}",
    ])


class BaseView(ABC):
    """
    Abstract base class for all plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - declare a 'filter_profile' - which controls it uses and which fields must be finite
    - implement 'compute_data' - the visible points of a ViewContext as a DataFrame
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None
    filter_profile: FilterProfile = None
    default_geometry: ChartGeometry = DASHBOARD_GEOMETRY

    def __init__(self, records: Sequence[Record], geometry: Optional[ChartGeometry] = None):
        self.records = tuple(records)
        self.geometry = geometry or self.default_geometry

    @abstractmethod
    def compute_data(self, ctx: ViewContext) -> pd.DataFrame:
        """
        Compute the plotted points for the given context
        :param ctx: the current {@link ViewContext} - controls, selection, visible subset, scales
        :return: data: one row per visible record
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: pd.DataFrame, ctx: ViewContext) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :param ctx: the context the data was computed from
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def context(self, state: Optional[FilterState] = None) -> ViewContext:
        return initial_context(self.id, self.records, self.filter_profile, self.geometry, state)

    def restore(self, data: Dict[str, Any]) -> ViewContext:
        """Rebuild the context from its dcc.Store representation."""
        return context_from_store(self.records, self.filter_profile, self.geometry, data)

    def timed_compute(self, ctx: ViewContext) -> pd.DataFrame:
        start = time.perf_counter()
        data = self.compute_data(ctx)
        logger.info(
            "compute_data",
            extra={
                "view_id": self.id,
                "n_points": len(data),
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return data

    def points_frame(self, ctx: ViewContext) -> pd.DataFrame:
        """
        One row per visible record: raw fields, data coordinates, projected
        pixel coordinates, colour and selection emphasis.
        """
        records = ctx.filtered
        if not records or ctx.scales is None:
            return pd.DataFrame(columns=POINT_COLUMNS)

        colors = director_colors(r.director for r in records)
        emphasis = point_emphasis(records, ctx.selection)

        data = pd.DataFrame(
            {
                "key": [record_key(r) for r in records],
                "title": [r.title for r in records],
                "year": [r.year for r in records],
                "director": [r.director for r in records],
                "rating": [r.rating for r in records],
                "runtime": [r.runtime for r in records],
                "gross": [r.gross for r in records],
                "x": [r.value(ctx.x_field) for r in records],
                "y": [r.value(ctx.y_field) for r in records],
                "color": [colors[r.director] for r in records],
                "stroke_width": [e.stroke_width for e in emphasis],
                "opacity": [e.opacity for e in emphasis],
                "hover": [hover_text(r) for r in records],
            }
        )
        data["px"] = ctx.scales.x(data["x"].to_numpy(dtype=float))
        data["py"] = ctx.scales.y(data["y"].to_numpy(dtype=float))
        return data[POINT_COLUMNS]

    def scatter_figure(self, data: pd.DataFrame, ctx: ViewContext, x_title: str, y_title: str) -> go.Figure:
        geometry = self.geometry
        fig = go.Figure(
            go.Scatter(
                x=data["x"],
                y=data["y"],
                mode="markers",
                customdata=data["key"],
                hovertext=data["hover"],
                hoverinfo="text",
                marker=dict(
                    size=POINT_RADIUS * 2,
                    color=list(data["color"]),
                    opacity=list(data["opacity"]),
                    line=dict(color=POINT_STROKE, width=list(data["stroke_width"])),
                ),
            )
        )
        # Pin axes to the nice domains so plotly draws exactly what the scales project.
        fig.update_xaxes(range=list(ctx.scales.x.domain), title_text=x_title, nticks=8)
        fig.update_yaxes(range=list(ctx.scales.y.domain), title_text=y_title, nticks=8)
        fig.update_layout(
            width=geometry.width,
            height=geometry.height,
            margin=dict(
                l=geometry.margin_left,
                r=geometry.margin_right,
                t=geometry.margin_top,
                b=geometry.margin_bottom,
            ),
            showlegend=False,
        )
        return fig

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
