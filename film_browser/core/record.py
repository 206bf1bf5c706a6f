from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

# A raw input row: column name -> cell value, as produced by the CSV reader.
RawValue = Union[str, int, float, None]
RawRow = Mapping[str, RawValue]

NUMERIC_FIELDS = ("year", "rating", "runtime", "gross")


def is_finite(value: Any) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True, eq=False)
class Record:
    """
    Canonical, normalised form of one input row.

    Numeric fields hold NaN when the source value is absent or unparseable;
    they are never defaulted to 0. `raw` keeps the untouched input row for
    diagnostics and is never used for rendering.

    Records compare by identity: two rows with identical values are still two films.
    """
    title: Optional[str]
    year: float
    director: Optional[str]
    rating: float
    runtime: float
    gross: float
    raw: RawRow = field(default_factory=dict, repr=False)

    def value(self, name: str) -> float:
        """Numeric field lookup by name (used for the chosen X metric)."""
        if name not in NUMERIC_FIELDS:
            raise KeyError(f"'{name}' is not a numeric record field")
        return getattr(self, name)

    def has_finite(self, *names: str) -> bool:
        return all(is_finite(self.value(n)) for n in names)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "year": self.year,
            "director": self.director,
            "rating": self.rating,
            "runtime": self.runtime,
            "gross": self.gross,
        }
