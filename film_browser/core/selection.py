"""
Rectangular brush selection.

Membership is decided in pixel space: a record is selected when its projected
position (through the current scales, nice padding included) lies inside the
brush rectangle, all four bounds inclusive. The committed selection is kept as
a set of record keys, so it survives re-renders and metric changes by identity
rather than by region.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .record import Record, is_finite
from .scales import AxisScales

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def format_year(year: float) -> str:
    if not is_finite(year):
        return "NaN"
    return str(int(year)) if float(year).is_integer() else str(year)


def record_key(record: Record) -> str:
    """
    Identity used by the selection set: "<title>_<year>".

    Not unique: two records sharing title and year collide and are selected
    together.
    """
    return f"{record.title or ''}_{format_year(record.year)}"


class SelectionPhase(str, Enum):
    IDLE = "idle"
    BRUSHING = "brushing"
    SELECTED = "selected"


@dataclass(frozen=True)
class BrushRect:
    """Pixel-space rectangle with x0 <= x1 and y0 <= y1."""
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> BrushRect:
        return cls(
            x0=min(a[0], b[0]),
            y0=min(a[1], b[1]),
            x1=max(a[0], b[0]),
            y1=max(a[1], b[1]),
        )

    @classmethod
    def from_data_range(
        cls,
        x_range: Sequence[float],
        y_range: Sequence[float],
        scales: AxisScales,
    ) -> BrushRect:
        """
        Build the pixel rectangle for a box drawn in data coordinates
        (plotly reports box selections that way).
        """
        a = (scales.x(x_range[0]), scales.y(y_range[0]))
        b = (scales.x(x_range[1]), scales.y(y_range[1]))
        return cls.from_corners(a, b)

    @property
    def is_empty(self) -> bool:
        return self.x0 == self.x1 or self.y0 == self.y1

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


def points_in_brush(
    records: Iterable[Record],
    scales: AxisScales,
    rect: BrushRect,
) -> List[Record]:
    return [r for r in records if rect.contains(scales.project(r))]


@dataclass(frozen=True)
class SelectionController:
    """
    Selection lifecycle: IDLE -> BRUSHING -> SELECTED -> IDLE.

    Instances are immutable; every transition returns the next controller.
    """
    phase: SelectionPhase = SelectionPhase.IDLE
    keys: FrozenSet[str] = frozenset()
    rect: Optional[BrushRect] = None

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> SelectionController:
        """Restore a committed selection (e.g. from a dcc.Store)."""
        keys = frozenset(keys)
        if not keys:
            return cls()
        return cls(phase=SelectionPhase.SELECTED, keys=keys)

    @property
    def active(self) -> bool:
        return self.phase is SelectionPhase.SELECTED and bool(self.keys)

    def begin_brush(self) -> SelectionController:
        # Dragging has no committed effect; the previous selection stays visible.
        return replace(self, phase=SelectionPhase.BRUSHING)

    def commit(
        self,
        rect: Optional[BrushRect],
        records: Sequence[Record],
        scales: Optional[AxisScales],
    ) -> SelectionController:
        if rect is None or rect.is_empty or scales is None:
            return self.clear()

        keys = frozenset(record_key(r) for r in points_in_brush(records, scales, rect))
        logger.debug(
            "brush_commit",
            extra={"rect": [rect.x0, rect.y0, rect.x1, rect.y1], "n_selected": len(keys)},
        )
        if not keys:
            return self.clear()
        return SelectionController(phase=SelectionPhase.SELECTED, keys=keys, rect=rect)

    def clear(self) -> SelectionController:
        return SelectionController()

    def is_selected(self, record: Record) -> bool:
        return record_key(record) in self.keys
