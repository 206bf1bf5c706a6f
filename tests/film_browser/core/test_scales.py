import math

import numpy as np
import pytest

from film_browser.config.model import ChartGeometry
from film_browser.core.exceptions import EmptyDomainError
from film_browser.core.record import Record
from film_browser.core.scales import (
    LinearScale,
    build_scales,
    extent,
    nice_domain,
    tick_increment,
)


def _rec(x, y) -> Record:
    return Record(title=None, year=x, director=None, rating=y, runtime=x, gross=math.nan)


def test_tick_increment_uses_1_2_5_steps():
    assert tick_increment(0, 100, 10) == 10
    assert tick_increment(86, 102, 10) == 2
    assert tick_increment(0, 40, 10) == 5
    # Fractional steps are encoded as negated inverses: 0.2 -> -5
    assert tick_increment(7.1, 9.1, 10) == -5


def test_nice_domain_extends_outward():
    assert nice_domain(86, 102) == (86, 102)
    assert nice_domain(83, 137) == (80, 140)
    assert nice_domain(7.5, 8.1) == pytest.approx((7.5, 8.1))
    assert nice_domain(7.3, 8.55) == pytest.approx((7.3, 8.6))


def test_nice_domain_handles_reversed_bounds():
    assert nice_domain(137, 83) == (80, 140)


def test_nice_domain_pads_degenerate_domain():
    lo, hi = nice_domain(8.1, 8.1)
    assert lo < 8.1 < hi

    lo, hi = nice_domain(0, 0)
    assert lo < 0 < hi

    lo, hi = nice_domain(-250, -250)
    assert lo < -250 < hi


@pytest.mark.parametrize(
    "values",
    [
        [86, 102],
        [7.3, 8.1, 8.55],
        [0.1, 0.7, 0.3],
        [516_962, 395_580_000],
        [1986, 2023],
        [-3.7, 12.2],
    ],
)
def test_domain_covers_all_values(values):
    lo, hi = nice_domain(min(values), max(values))
    for v in values:
        assert lo <= v <= hi


def test_extent_ignores_non_finite_and_rejects_empty():
    assert extent([3, math.nan, 1, 2]) == (1, 3)
    with pytest.raises(EmptyDomainError):
        extent([math.nan])
    with pytest.raises(EmptyDomainError):
        extent([])


def test_linear_scale_maps_scalars_and_arrays():
    scale = LinearScale(domain=(0, 10), range=(0, 100))
    assert scale(5) == 50
    assert list(scale(np.array([0.0, 10.0]))) == [0, 100]


def test_build_scales_y_axis_runs_top_down():
    geometry = ChartGeometry(width=200, height=120, margin_top=10, margin_right=0,
                             margin_bottom=10, margin_left=0)
    scales = build_scales([_rec(80, 7), _rec(140, 9)], "runtime", "rating", geometry)

    assert scales.x.range == (0, 200)
    assert scales.y.range == (100, 0)

    # Highest rating is drawn at the top (pixel 0), lowest at the bottom
    assert scales.project(_rec(140, 9)) == (200, 0)
    assert scales.project(_rec(80, 7)) == (0, 100)


def test_build_scales_single_point_does_not_collapse():
    geometry = ChartGeometry()
    scales = build_scales([_rec(100, 8.0)], "runtime", "rating", geometry)

    assert scales.x.domain[0] < scales.x.domain[1]
    assert scales.y.domain[0] < scales.y.domain[1]
    x, y = scales.project(_rec(100, 8.0))
    assert 0 < x < geometry.inner_width
    assert 0 < y < geometry.inner_height
