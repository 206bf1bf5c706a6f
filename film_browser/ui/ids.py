from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        DASHBOARD_STATE = "dashboard-state"

    class Control:
        PAGE_TABS = "page-tabs"

        # Static scatter
        SCATTER_GRAPH = "scatter-graph"
        SCATTER_STATUS = "scatter-status"

        # Dashboard controls
        METRIC_SELECT = "metric-select"
        DIRECTOR_SELECT = "director-select"
        YEAR_MIN = "year-min"
        YEAR_MAX = "year-max"
        YEAR_MIN_LABEL = "year-min-label"
        YEAR_MAX_LABEL = "year-max-label"

        # Dashboard graph + selection
        DASHBOARD_GRAPH = "dashboard-graph"
        DASHBOARD_STATUS = "dashboard-status"
        CLEAR_SELECTION_BTN = "clear-selection-btn"

        # Result table + downloads
        RESULT_TABLE = "result-table"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"
