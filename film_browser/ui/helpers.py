from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from dash import html

from film_browser.core.filter_engine import director_options
from film_browser.core.filter_state import ALL_DIRECTORS, FilterState, METRIC_LABELS
from film_browser.core.orchestrator import Status
from film_browser.core.record import Record
from film_browser.core.view_sync import format_number

ERROR_COLOR = "#ff9aa2"

TABLE_COLUMNS = [
    {"name": "Title", "id": "title"},
    {"name": "Year", "id": "year"},
    {"name": "Director", "id": "director"},
    {"name": "Rating", "id": "rating"},
    {"name": "Gross", "id": "gross"},
]


def metric_dropdown_options() -> List[dict]:
    return [{"label": label, "value": metric} for metric, label in METRIC_LABELS.items()]


def director_dropdown_options(records: Sequence[Record]) -> List[dict]:
    options = [{"label": "All directors", "value": ALL_DIRECTORS}]
    options.extend({"label": d, "value": d} for d in director_options(records))
    return options


def status_style(status: Status) -> dict:
    return {"color": ERROR_COLOR if status.is_error else "inherit"}


def status_line(status: Status, element_id: str) -> html.Div:
    return html.Div(
        status.message,
        id=element_id,
        className="fb-status small mb-2",
        style=status_style(status),
    )


def year_labels(state: FilterState) -> Tuple[str, str]:
    """The two year labels always show the min/max-ordered live values."""
    bounds: Optional[Tuple[float, float]] = state.year_range()
    if bounds is None:
        return "—", "—"
    return format_number(bounds[0]), format_number(bounds[1])
