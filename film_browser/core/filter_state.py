from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

ALL_DIRECTORS = "ALL"

# X-axis metrics offered by the dashboard and their axis labels.
METRIC_LABELS: Dict[str, str] = {
    "runtime": "Runtime (min)",
    "gross": "Gross",
    "year": "Release year",
}
DEFAULT_METRIC = "runtime"
RATING_LABEL = "Rating (IMDb etc.)"


def metric_label(metric: Optional[str]) -> str:
    return METRIC_LABELS.get(metric or "", metric or "")


@dataclass
class FilterState:
    """
    Represents the current control values of one view.

    Fields:

    - view_id: the view these controls belong to
    - metric: field plotted on X, or None when the view has a fixed X field
    - director: selected director, or the ALL sentinel for no restriction
    - year_min / year_max: the two year-bound controls, exactly as the user left
      them. They may cross; use year_range() to read them.
    - selection: record keys of the committed brush selection
    """

    view_id: str
    metric: Optional[str] = None
    director: str = ALL_DIRECTORS
    year_min: Optional[float] = None
    year_max: Optional[float] = None
    selection: List[str] = field(default_factory=list)

    def year_range(self) -> Optional[Tuple[float, float]]:
        """Min/max-ordered year bounds, or None when either bound is unset."""
        if self.year_min is None or self.year_max is None:
            return None
        return min(self.year_min, self.year_max), max(self.year_min, self.year_max)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterState:
        return cls(
            view_id=data.get("view_id"),
            metric=data.get("metric"),
            director=data.get("director") or ALL_DIRECTORS,
            year_min=_optional_float(data.get("year_min")),
            year_max=_optional_float(data.get("year_max")),
            selection=list(data.get("selection", [])),
        )


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)
