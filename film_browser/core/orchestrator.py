"""
Update cycle of a view.

One owned `ViewContext` per view holds the records, control values, selection,
visible subset and scales. Control and brush events are plain dataclasses fed
through `update`, which returns the next context and what has to be redrawn:

    event -> FilterEngine -> ScaleMapper -> render -> SelectionController -> ViewSync

The only asynchronous step is the initial `load_records`.

plotly reports a box selection only once the drag ends, so the Dash callbacks
never send `BrushStarted`; it exists for surfaces that do report a drag start
and keeps the BRUSHING phase of the selection lifecycle reachable.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from film_browser.config.model import ChartGeometry

from .dataset_loader import read_rows
from .exceptions import ReentrantDispatchError
from .filter_engine import eligible_records, filter_records, year_bounds
from .filter_profile import FilterProfile
from .filter_state import ALL_DIRECTORS, DEFAULT_METRIC, FilterState, metric_label
from .normalizer import normalize_rows
from .record import RawRow, Record
from .scales import AxisScales, build_scales
from .selection import BrushRect, SelectionController
from .view_sync import TABLE_LIMIT, SyncResult, sync

logger = logging.getLogger(__name__)

DIAGNOSTIC_SAMPLE_SIZE = 5

LOADING_MESSAGE = "Loading data…"
ZERO_ELIGIBLE_MESSAGE = (
    "zero eligible rows: the column names may differ or the values are empty "
    "(sample rows were logged)"
)
FILTERED_EMPTY_MESSAGE = "no rows after filtering: check column names, values, or year range"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MetricChanged:
    metric: str


@dataclass(frozen=True)
class DirectorChanged:
    director: str


@dataclass(frozen=True)
class YearBoundChanged:
    bound: str  # "min" or "max"
    value: float


@dataclass(frozen=True)
class BrushStarted:
    pass


@dataclass(frozen=True)
class BrushCommitted:
    rect: Optional[BrushRect]


@dataclass(frozen=True)
class BackgroundCleared:
    pass


Event = Union[
    MetricChanged, DirectorChanged, YearBoundChanged,
    BrushStarted, BrushCommitted, BackgroundCleared,
]


class RenderInstruction(str, Enum):
    FULL = "full"          # scales/points changed: redraw chart, table and emphasis
    EMPHASIS = "emphasis"  # selection changed: restyle points and refresh the table
    NONE = "none"          # nothing visible changed
    EMPTY = "empty"        # nothing left after filtering: show the diagnostic


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------
class StatusKind(str, Enum):
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class Status:
    kind: StatusKind
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind in (StatusKind.EMPTY, StatusKind.FAILED)


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ViewContext:
    records: Tuple[Record, ...]
    profile: FilterProfile
    geometry: ChartGeometry
    state: FilterState
    selection: SelectionController = SelectionController()
    filtered: Tuple[Record, ...] = ()
    scales: Optional[AxisScales] = None

    @property
    def x_field(self) -> str:
        return self.state.metric or self.profile.fixed_x

    @property
    def y_field(self) -> str:
        return "rating"

    @property
    def is_empty(self) -> bool:
        return not self.filtered

    def status(self) -> Status:
        if self.is_empty:
            return Status(StatusKind.EMPTY, FILTERED_EMPTY_MESSAGE)
        message = f"Loaded {len(self.filtered)} rows"
        if self.profile.metric:
            message += f" (Y = rating / X = {metric_label(self.state.metric)})"
        return Status(StatusKind.READY, message)

    def synced(self, limit: int = TABLE_LIMIT) -> SyncResult:
        return sync(self.filtered, self.selection, limit)

    def to_store(self) -> Dict[str, Any]:
        data = self.state.to_dict()
        data["selection"] = sorted(self.selection.keys)
        return data


def refresh(ctx: ViewContext) -> ViewContext:
    """Recompute the visible subset and fit the scales to it."""
    filtered = tuple(filter_records(ctx.records, ctx.state, ctx.profile.ordinate))
    scales = (
        build_scales(filtered, ctx.x_field, ctx.y_field, ctx.geometry)
        if filtered else None
    )
    return replace(ctx, filtered=filtered, scales=scales)


def default_state(view_id: str, records: Sequence[Record], profile: FilterProfile) -> FilterState:
    state = FilterState(view_id=view_id)
    if profile.metric:
        state.metric = DEFAULT_METRIC
    if profile.year_range:
        bounds = year_bounds(records)
        if bounds is not None:
            state.year_min, state.year_max = bounds
    return state


def initial_context(
    view_id: str,
    records: Sequence[Record],
    profile: FilterProfile,
    geometry: ChartGeometry,
    state: Optional[FilterState] = None,
) -> ViewContext:
    if state is None:
        state = default_state(view_id, records, profile)
    ctx = ViewContext(
        records=tuple(records),
        profile=profile,
        geometry=geometry,
        state=state,
        selection=SelectionController.from_keys(state.selection),
    )
    return refresh(ctx)


def context_from_store(
    records: Sequence[Record],
    profile: FilterProfile,
    geometry: ChartGeometry,
    data: Dict[str, Any],
) -> ViewContext:
    state = FilterState.from_dict(data)
    return initial_context(state.view_id, records, profile, geometry, state)


def _with_state(ctx: ViewContext, state: FilterState) -> Tuple[ViewContext, RenderInstruction]:
    # The selection is keyed by record identity and is kept as-is; emphasis is
    # recomputed against the new projection when the chart is redrawn.
    ctx = refresh(replace(ctx, state=state))
    return ctx, (RenderInstruction.EMPTY if ctx.is_empty else RenderInstruction.FULL)


def update(ctx: ViewContext, event: Event) -> Tuple[ViewContext, RenderInstruction]:
    state = ctx.state

    if isinstance(event, MetricChanged):
        return _with_state(ctx, replace(state, metric=event.metric))

    if isinstance(event, DirectorChanged):
        return _with_state(ctx, replace(state, director=event.director or ALL_DIRECTORS))

    if isinstance(event, YearBoundChanged):
        if event.bound == "min":
            return _with_state(ctx, replace(state, year_min=float(event.value)))
        if event.bound == "max":
            return _with_state(ctx, replace(state, year_max=float(event.value)))
        raise ValueError(f"Unknown year bound '{event.bound}'")

    if isinstance(event, BrushStarted):
        return replace(ctx, selection=ctx.selection.begin_brush()), RenderInstruction.NONE

    if isinstance(event, BrushCommitted):
        selection = ctx.selection.commit(event.rect, ctx.filtered, ctx.scales)
        return replace(ctx, selection=selection), RenderInstruction.EMPHASIS

    if isinstance(event, BackgroundCleared):
        return replace(ctx, selection=ctx.selection.clear()), RenderInstruction.EMPHASIS

    raise TypeError(f"Unsupported event: {event!r}")


RenderCallback = Callable[[ViewContext, RenderInstruction], None]


class Orchestrator:
    """
    Owns one ViewContext and processes events one at a time, to completion.

    A render callback that dispatches another event while the current one is
    still being processed raises ReentrantDispatchError.
    """

    def __init__(self, ctx: ViewContext, on_render: Optional[RenderCallback] = None):
        self.ctx = ctx
        self.on_render = on_render
        self._dispatching = False

    def dispatch(self, event: Event) -> RenderInstruction:
        if self._dispatching:
            raise ReentrantDispatchError(
                f"Cannot dispatch {type(event).__name__} while another event is in progress"
            )
        self._dispatching = True
        try:
            self.ctx, instruction = update(self.ctx, event)
            if self.on_render is not None and instruction is not RenderInstruction.NONE:
                self.on_render(self.ctx, instruction)
        finally:
            self._dispatching = False
        return instruction


# ---------------------------------------------------------------------------
# Initial load
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LoadResult:
    rows: Tuple[RawRow, ...]
    records: Tuple[Record, ...]
    status: Status

    @property
    def ok(self) -> bool:
        return self.status.kind is not StatusKind.FAILED


RowReader = Callable[[Path], List[RawRow]]


async def load_records(path: Path | str, reader: RowReader = read_rows) -> LoadResult:
    """
    Single load attempt, no retry. Any failure becomes a FAILED status carrying
    the underlying message.
    """
    try:
        rows = await asyncio.to_thread(reader, Path(path))
    except Exception as e:
        logger.exception("Data load failed", extra={"path": str(path)})
        return LoadResult(rows=(), records=(), status=Status(StatusKind.FAILED, f"load failed: {e}"))

    records = normalize_rows(rows)
    logger.info("Data loaded", extra={"path": str(path), "n_rows": len(records)})
    return LoadResult(
        rows=tuple(rows),
        records=tuple(records),
        status=Status(StatusKind.READY, f"Loaded {len(records)} rows"),
    )


def readiness(load: LoadResult, profile: FilterProfile) -> Status:
    """
    Check that a view has anything to show: at least one record with finite
    rating and ordinate. Otherwise log raw/normalised samples and report the
    zero-eligible-rows state.
    """
    if not load.ok:
        return load.status

    eligible = eligible_records(load.records, "rating", profile.ordinate)
    if eligible:
        return Status(StatusKind.READY, f"Loaded {len(eligible)} rows")

    logger.warning(
        "Zero eligible rows",
        extra={
            "required": ["rating", profile.ordinate],
            "raw_sample": [dict(r) for r in load.rows[:DIAGNOSTIC_SAMPLE_SIZE]],
            "normalized_sample": [r.to_dict() for r in load.records[:DIAGNOSTIC_SAMPLE_SIZE]],
        },
    )
    return Status(StatusKind.EMPTY, ZERO_ELIGIBLE_MESSAGE)
