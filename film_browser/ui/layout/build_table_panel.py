from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from film_browser.ui.helpers import TABLE_COLUMNS
from film_browser.ui.ids import IDs


def build_table_panel(table_limit: int) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong(f"Selection (top {table_limit} by rating)"),
                        dbc.Button(
                            "Download data (CSV)",
                            id=IDs.Control.DOWNLOAD_DATA_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-auto",
                        ),
                        dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                dash_table.DataTable(
                    id=IDs.Control.RESULT_TABLE,
                    columns=TABLE_COLUMNS,
                    data=[],
                    style_as_list_view=True,
                    style_cell={"padding": "8px", "textAlign": "left"},
                    style_header={"fontWeight": "bold"},
                ),
            ),
        ],
        className="fb-tablecard mt-3",
    )
