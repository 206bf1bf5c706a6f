from __future__ import annotations

from typing import List, Optional

import pandas as pd
from plotly.graph_objs import Figure

from film_browser.config.model import SCATTER_GEOMETRY
from film_browser.core.base_view import BaseView, HOVER_RADIUS, POINT_RADIUS
from film_browser.core.filter_profile import FilterProfile
from film_browser.core.filter_state import METRIC_LABELS, RATING_LABEL
from film_browser.core.orchestrator import ViewContext


def hover_sizes(n_points: int, hovered: Optional[int]) -> List[int]:
    """Marker sizes with the hovered point enlarged (None: pointer left the chart)."""
    sizes = [POINT_RADIUS * 2] * n_points
    if hovered is not None and 0 <= hovered < n_points:
        sizes[hovered] = HOVER_RADIUS * 2
    return sizes


class ScatterView(BaseView):
    """
    Static runtime vs rating scatter with hover detail.

    - X = runtime, Y = rating
    - Color by director
    - No controls, no selection
    """

    id = "scatter"
    label = "Runtime vs Rating"

    filter_profile = FilterProfile(ordinate="runtime", fixed_x="runtime")
    default_geometry = SCATTER_GEOMETRY

    def compute_data(self, ctx: ViewContext) -> pd.DataFrame:
        return self.points_frame(ctx)

    def render_figure(self, data: pd.DataFrame, ctx: ViewContext) -> Figure:
        if data.empty:
            return self.empty_figure(ctx.status().message)

        fig = self.scatter_figure(data, ctx, METRIC_LABELS["runtime"], RATING_LABEL)
        # Faint horizontal grid only.
        fig.update_xaxes(showgrid=False)
        fig.update_yaxes(showgrid=True, gridcolor="rgba(128,128,128,.12)")
        fig.update_layout(hovermode="closest")
        return fig
