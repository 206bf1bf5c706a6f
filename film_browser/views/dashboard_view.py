from __future__ import annotations

import pandas as pd
from plotly.graph_objs import Figure

from film_browser.config.model import DASHBOARD_GEOMETRY
from film_browser.core.base_view import BaseView
from film_browser.core.filter_profile import FilterProfile
from film_browser.core.filter_state import RATING_LABEL, metric_label
from film_browser.core.orchestrator import ViewContext


class DashboardView(BaseView):
    """
    Cross-filtering scatter: X from the metric selector, Y fixed to rating.

    - Filtered by director and year range
    - Brushable (box select); selected points are emphasised and listed in the table
    """

    id = "dashboard"
    label = "Dashboard"

    filter_profile = FilterProfile(
        ordinate="year",
        metric=True,
        director=True,
        year_range=True,
        brush=True,
    )
    default_geometry = DASHBOARD_GEOMETRY

    def compute_data(self, ctx: ViewContext) -> pd.DataFrame:
        return self.points_frame(ctx)

    def render_figure(self, data: pd.DataFrame, ctx: ViewContext) -> Figure:
        if data.empty:
            return self.empty_figure(ctx.status().message)

        fig = self.scatter_figure(data, ctx, metric_label(ctx.state.metric), RATING_LABEL)
        fig.update_layout(
            dragmode="select",
            clickmode="event",
            # Keep zoom/selection UI stable across re-renders of the same metric.
            uirevision=ctx.state.metric,
        )
        return fig
