import asyncio
import logging
import math

import pytest

from film_browser.config.model import ChartGeometry
from film_browser.core.exceptions import ReentrantDispatchError
from film_browser.core.filter_profile import FilterProfile
from film_browser.core.normalizer import normalize_rows
from film_browser.core.orchestrator import (
    BackgroundCleared,
    BrushCommitted,
    BrushStarted,
    DirectorChanged,
    FILTERED_EMPTY_MESSAGE,
    MetricChanged,
    Orchestrator,
    RenderInstruction,
    StatusKind,
    YearBoundChanged,
    ZERO_ELIGIBLE_MESSAGE,
    context_from_store,
    initial_context,
    load_records,
    readiness,
    update,
)
from film_browser.core.selection import BrushRect, SelectionPhase

DASHBOARD = FilterProfile(ordinate="year", metric=True, director=True, year_range=True, brush=True)
STATIC = FilterProfile(ordinate="runtime", fixed_x="runtime")
GEOMETRY = ChartGeometry()

ROWS = [
    {"title": "A", "year": "1988", "director": "Miyazaki", "rating": "8.1", "runtime": "86", "gross": "$30,000,000"},
    {"title": "B", "year": "1989", "director": "Takahata", "rating": "7.5", "runtime": "102", "gross": ""},
    {"title": "C", "year": "1997", "director": "Miyazaki", "rating": "8.3", "runtime": "134", "gross": "$169,785,629"},
    {"title": "D", "year": "2013", "director": "Takahata", "rating": "8.0", "runtime": "137", "gross": "24,366,656"},
]


def _dashboard_ctx(rows=ROWS):
    return initial_context("dashboard", normalize_rows(rows), DASHBOARD, GEOMETRY)


def _select_all(ctx):
    rect = BrushRect(0, 0, GEOMETRY.inner_width, GEOMETRY.inner_height)
    ctx, instruction = update(ctx, BrushCommitted(rect))
    assert instruction is RenderInstruction.EMPHASIS
    return ctx


# ---------------------------------------------------------------------------
# Initial load
# ---------------------------------------------------------------------------
def test_end_to_end_two_rows_static_view():
    rows = [
        {"title": "A", "year": "1988", "rating": "8.1", "runtime": "86"},
        {"title": "B", "year": "1989", "rating": "7.5", "runtime": "102"},
    ]
    load = asyncio.run(load_records("ignored.csv", reader=lambda _path: rows))

    assert load.ok
    assert readiness(load, STATIC).kind is StatusKind.READY

    ctx = initial_context("scatter", load.records, STATIC, GEOMETRY)
    assert len(ctx.filtered) == 2
    assert ctx.status().kind is StatusKind.READY
    assert "2 rows" in ctx.status().message


def test_end_to_end_blank_rating_is_zero_eligible(caplog):
    rows = [{"title": "A", "year": "1988", "rating": "", "runtime": "86"}]
    load = asyncio.run(load_records("ignored.csv", reader=lambda _path: rows))

    with caplog.at_level(logging.WARNING):
        status = readiness(load, STATIC)

    assert status.kind is StatusKind.EMPTY
    assert status.message == ZERO_ELIGIBLE_MESSAGE
    assert status.is_error
    assert any(r.getMessage() == "Zero eligible rows" for r in caplog.records)
    record = next(r for r in caplog.records if r.getMessage() == "Zero eligible rows")
    assert record.raw_sample == rows
    assert record.normalized_sample[0]["title"] == "A"


def test_load_failure_becomes_failed_status():
    def boom(_path):
        raise OSError("disk on fire")

    load = asyncio.run(load_records("data.csv", reader=boom))

    assert not load.ok
    assert load.records == ()
    assert load.status.kind is StatusKind.FAILED
    assert load.status.message == "load failed: disk on fire"
    # Every view inherits the terminal failure
    assert readiness(load, DASHBOARD) == load.status


def test_load_records_reads_csv_file(tmp_path):
    path = tmp_path / "films.csv"
    path.write_text("Film,Year,IMDb,Minutes\nTotoro,1988,8.1,86\n", encoding="utf-8")

    load = asyncio.run(load_records(path))

    assert load.ok
    assert load.records[0].title == "Totoro"
    assert load.records[0].runtime == 86


def test_load_records_missing_file_is_failed(tmp_path):
    load = asyncio.run(load_records(tmp_path / "nope.csv"))
    assert load.status.kind is StatusKind.FAILED
    assert load.status.message.startswith("load failed: ")


# ---------------------------------------------------------------------------
# Update cycle
# ---------------------------------------------------------------------------
def test_initial_dashboard_state_uses_data_year_bounds():
    ctx = _dashboard_ctx()
    assert ctx.state.metric == "runtime"
    assert (ctx.state.year_min, ctx.state.year_max) == (1988, 2013)
    assert len(ctx.filtered) == 4
    assert ctx.status().message == "Loaded 4 rows (Y = rating / X = Runtime (min))"


def test_metric_change_refits_scales_and_keeps_selection_keys():
    ctx = _select_all(_dashboard_ctx())
    keys_before = ctx.selection.keys
    x_domain_before = ctx.scales.x.domain

    ctx, instruction = update(ctx, MetricChanged("gross"))

    assert instruction is RenderInstruction.FULL
    assert ctx.x_field == "gross"
    # B has no gross and drops out; domain is recomputed from the new subset
    assert [r.title for r in ctx.filtered] == ["A", "C", "D"]
    assert ctx.scales.x.domain != x_domain_before
    lo, hi = ctx.scales.x.domain
    assert lo <= 169_785_629 <= hi
    # Selection identity is by key, not by region
    assert ctx.selection.keys == keys_before
    assert len(ctx.synced().table) == 3


def test_director_and_year_changes_filter():
    ctx = _dashboard_ctx()

    ctx, instruction = update(ctx, DirectorChanged("Takahata"))
    assert instruction is RenderInstruction.FULL
    assert [r.title for r in ctx.filtered] == ["B", "D"]

    # Crossed bounds are min/max ordered
    ctx, _ = update(ctx, YearBoundChanged("min", 2000))
    ctx, _ = update(ctx, YearBoundChanged("max", 1989))
    assert ctx.state.year_range() == (1989, 2000)
    assert [r.title for r in ctx.filtered] == ["B"]


def test_filtering_everything_out_is_empty_state():
    ctx = _dashboard_ctx()
    ctx, instruction = update(ctx, DirectorChanged("Nobody"))

    assert instruction is RenderInstruction.EMPTY
    assert ctx.filtered == ()
    assert ctx.scales is None
    assert ctx.status().kind is StatusKind.EMPTY
    assert ctx.status().message == FILTERED_EMPTY_MESSAGE


def test_director_none_means_all():
    ctx = _dashboard_ctx()
    ctx, _ = update(ctx, DirectorChanged(None))
    assert len(ctx.filtered) == 4


def test_unknown_year_bound_rejected():
    with pytest.raises(ValueError):
        update(_dashboard_ctx(), YearBoundChanged("middle", 1990))


def test_brush_lifecycle_and_background_clear():
    ctx = _dashboard_ctx()

    ctx, instruction = update(ctx, BrushStarted())
    assert instruction is RenderInstruction.NONE
    assert ctx.selection.phase is SelectionPhase.BRUSHING

    ctx = _select_all(ctx)
    assert ctx.selection.phase is SelectionPhase.SELECTED
    assert len(ctx.synced().table) == 4
    assert ctx.synced().table[0]["title"] == "C"

    ctx, instruction = update(ctx, BackgroundCleared())
    assert instruction is RenderInstruction.EMPHASIS
    assert ctx.selection.phase is SelectionPhase.IDLE
    synced = ctx.synced()
    assert synced.table == []
    assert all(e.opacity == 0.92 and e.stroke_width == 1.0 for e in synced.emphasis)


def test_null_brush_clears_selection():
    ctx = _select_all(_dashboard_ctx())
    ctx, _ = update(ctx, BrushCommitted(None))
    assert ctx.selection.keys == frozenset()


def test_store_round_trip_restores_context():
    ctx = _select_all(_dashboard_ctx())
    ctx, _ = update(ctx, MetricChanged("year"))

    restored = context_from_store(ctx.records, DASHBOARD, GEOMETRY, ctx.to_store())

    assert restored.state.metric == "year"
    assert restored.state.year_range() == ctx.state.year_range()
    assert restored.state.selection == sorted(ctx.selection.keys)
    assert restored.selection.keys == ctx.selection.keys
    assert restored.filtered == ctx.filtered
    assert restored.scales == ctx.scales


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------
def test_orchestrator_dispatch_invokes_render_callback():
    rendered = []
    orchestrator = Orchestrator(_dashboard_ctx(), on_render=lambda c, i: rendered.append(i))

    orchestrator.dispatch(MetricChanged("gross"))
    orchestrator.dispatch(BrushStarted())
    orchestrator.dispatch(BackgroundCleared())

    assert rendered == [RenderInstruction.FULL, RenderInstruction.EMPHASIS]
    assert orchestrator.ctx.state.metric == "gross"


def test_orchestrator_rejects_reentrant_dispatch():
    def render(ctx, instruction):
        orchestrator.dispatch(BackgroundCleared())

    orchestrator = Orchestrator(_dashboard_ctx(), on_render=render)

    with pytest.raises(ReentrantDispatchError):
        orchestrator.dispatch(MetricChanged("gross"))

    # The guard is released afterwards
    orchestrator.on_render = None
    assert orchestrator.dispatch(BackgroundCleared()) is RenderInstruction.EMPHASIS


def test_static_view_ignores_missing_year():
    rows = [{"title": "X", "rating": "7", "runtime": "90"}]
    ctx = initial_context("scatter", normalize_rows(rows), STATIC, GEOMETRY)
    assert len(ctx.filtered) == 1
    assert math.isnan(ctx.filtered[0].year)
