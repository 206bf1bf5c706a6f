"""
Propagates the selection to the result table and to per-point emphasis.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .record import Record, is_finite
from .selection import SelectionController, record_key

TABLE_LIMIT = 30
PLACEHOLDER = "—"


def format_number(value: Optional[float]) -> str:
    """Plain rendering: 1988.0 -> "1988", 8.1 -> "8.1", nan -> "—"."""
    if not is_finite(value):
        return PLACEHOLDER
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def format_gross(value: Optional[float]) -> str:
    if not is_finite(value):
        return PLACEHOLDER
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    if value >= 1e3:
        return f"{value / 1e3:.2f}K"
    return format_number(value)


def table_rows(
    records: Sequence[Record],
    selection: SelectionController,
    limit: int = TABLE_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Selected subset of the visible records, best rated first, capped at
    `limit` rows. Empty when nothing is selected.
    """
    if not selection.keys:
        return []

    selected = [r for r in records if selection.is_selected(r)]
    selected.sort(key=lambda r: r.rating, reverse=True)

    return [
        {
            "key": record_key(r),
            "title": r.title if r.title is not None else PLACEHOLDER,
            "year": format_number(r.year),
            "director": r.director if r.director is not None else PLACEHOLDER,
            "rating": format_number(r.rating),
            "gross": format_gross(r.gross),
        }
        for r in selected[:limit]
    ]


@dataclass(frozen=True)
class Emphasis:
    stroke_width: float
    opacity: float


BASELINE = Emphasis(stroke_width=1.0, opacity=0.92)
HIGHLIGHTED = Emphasis(stroke_width=2.5, opacity=1.0)
FADED = Emphasis(stroke_width=1.0, opacity=0.35)


def point_emphasis(records: Sequence[Record], selection: SelectionController) -> List[Emphasis]:
    if not selection.keys:
        return [BASELINE] * len(records)
    return [HIGHLIGHTED if selection.is_selected(r) else FADED for r in records]


@dataclass(frozen=True)
class SyncResult:
    table: List[Dict[str, Any]]
    emphasis: List[Emphasis]


def sync(
    records: Sequence[Record],
    selection: SelectionController,
    limit: int = TABLE_LIMIT,
) -> SyncResult:
    """The table cap never touches the emphasis list or the selection itself."""
    return SyncResult(
        table=table_rows(records, selection, limit),
        emphasis=point_emphasis(records, selection),
    )
