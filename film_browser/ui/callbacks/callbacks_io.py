from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
import pandas as pd
from dash import Input, Output, State, dcc, exceptions

from film_browser.ui.helpers import TABLE_COLUMNS
from film_browser.ui.ids import IDs

if TYPE_CHECKING:
    from film_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

DASHBOARD_VIEW_ID = "dashboard"


def selection_frame(table: list[dict]) -> pd.DataFrame:
    """The visible result table as a DataFrame with display headers."""
    columns = [c["id"] for c in TABLE_COLUMNS]
    frame = pd.DataFrame(table, columns=columns)
    return frame.rename(columns={c["id"]: c["name"] for c in TABLE_COLUMNS})


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    view = ctx.view(DASHBOARD_VIEW_ID)
    table_limit = ctx.global_config.table_limit

    # ---------------------------------------------------------
    # Export Logic
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.DASHBOARD_STATE, "data"),
        prevent_initial_call=True,
    )
    def download_selection(n_clicks, store):
        if not n_clicks or not store:
            raise exceptions.PreventUpdate

        view_ctx = view.restore(store["state"])
        table = view_ctx.synced(table_limit).table
        if not table:
            raise exceptions.PreventUpdate

        logger.info("download_selection", extra={"n_rows": len(table)})
        return dcc.send_data_frame(selection_frame(table).to_csv, "selection.csv", index=False)
