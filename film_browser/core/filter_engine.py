"""
Predicate pipeline producing the visible subset of records.

Filtering is recomputed in full on every control change and keeps the input
order. An empty result is a normal outcome; callers render an explicit
diagnostic for it.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .filter_state import ALL_DIRECTORS, FilterState
from .record import Record, is_finite

Predicate = Callable[[Record], bool]


def build_predicates(state: FilterState, ordinate: str) -> List[Predicate]:
    predicates: List[Predicate] = [
        lambda r: is_finite(r.rating),
        lambda r: is_finite(r.value(ordinate)),
    ]

    if state.metric:
        metric = state.metric
        predicates.append(lambda r: is_finite(r.value(metric)))

    bounds = state.year_range()
    if bounds is not None:
        lo, hi = bounds
        predicates.append(lambda r: lo <= r.year <= hi)

    if state.director != ALL_DIRECTORS:
        director = state.director
        predicates.append(lambda r: r.director == director)

    return predicates


def filter_records(
    records: Sequence[Record],
    state: FilterState,
    ordinate: str,
) -> List[Record]:
    """Stable filter: every predicate must hold, input order is preserved."""
    predicates = build_predicates(state, ordinate)
    return [r for r in records if all(p(r) for p in predicates)]


def eligible_records(records: Sequence[Record], *fields: str) -> List[Record]:
    """Records whose given numeric fields are all finite."""
    return [r for r in records if r.has_finite(*fields)]


def director_options(records: Sequence[Record]) -> List[str]:
    """Sorted distinct non-empty directors (the ALL sentinel is added by the UI)."""
    return sorted({r.director for r in records if r.director})


def year_bounds(records: Sequence[Record]) -> Optional[Tuple[float, float]]:
    years = [r.year for r in records if is_finite(r.year)]
    if not years:
        return None
    return min(years), max(years)
