from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChartGeometry:
    """
    Pixel geometry of a chart: outer size plus margins around the drawing area.
    """
    width: int = 980
    height: int = 520
    margin_top: int = 30
    margin_right: int = 30
    margin_bottom: int = 60
    margin_left: int = 70

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], default: ChartGeometry) -> ChartGeometry:
        margin = raw.get("margin", {})
        return cls(
            width=int(raw.get("width", default.width)),
            height=int(raw.get("height", default.height)),
            margin_top=int(margin.get("top", default.margin_top)),
            margin_right=int(margin.get("right", default.margin_right)),
            margin_bottom=int(margin.get("bottom", default.margin_bottom)),
            margin_left=int(margin.get("left", default.margin_left)),
        )


SCATTER_GEOMETRY = ChartGeometry(
    width=920, height=520, margin_top=30, margin_right=20, margin_bottom=55, margin_left=70,
)
DASHBOARD_GEOMETRY = ChartGeometry()


@dataclass
class GlobalConfig:
    ui_title: str = "Film Browser"
    subtitle: str = "Runtime, rating and gross at a glance"
    data_path: Optional[Path] = None
    table_limit: int = 30
    scatter_geometry: ChartGeometry = field(default=SCATTER_GEOMETRY)
    dashboard_geometry: ChartGeometry = field(default=DASHBOARD_GEOMETRY)
