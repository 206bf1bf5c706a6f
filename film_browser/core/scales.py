"""
Linear data -> pixel mappings with "nice" rounded domains.

Domains come from the *visible* subset, so scales must be rebuilt whenever the
filtered records or the X metric change.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from film_browser.config.model import ChartGeometry

from .exceptions import EmptyDomainError
from .record import Record, is_finite

Number = Union[float, np.ndarray]

DEFAULT_TICK_COUNT = 10

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int = DEFAULT_TICK_COUNT) -> float:
    """
    Step of a 1/2/5 x 10^n tick sequence covering [start, stop] in ~count ticks.

    Positive results are the step itself; negative results encode a fractional
    step as its negated inverse (-5 means 0.2) so rounding stays exact.
    """
    step = (stop - start) / max(0, count)
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def _pad_degenerate(value: float) -> Tuple[float, float]:
    # Zero-width domain: widen by one unit of the value's magnitude.
    if value == 0:
        return -1.0, 1.0
    unit = 10 ** math.floor(math.log10(abs(value)))
    return value - unit, value + unit


def nice_domain(lo: float, hi: float, count: int = DEFAULT_TICK_COUNT) -> Tuple[float, float]:
    """Extend [lo, hi] outward to round step boundaries; never zero-width."""
    if hi < lo:
        lo, hi = hi, lo
    if lo == hi:
        lo, hi = _pad_degenerate(lo)
    data_lo, data_hi = lo, hi

    previous = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step == previous:
            break
        if step > 0:
            lo = math.floor(lo / step) * step
            hi = math.ceil(hi / step) * step
        elif step < 0:
            lo = math.ceil(lo * step) / step
            hi = math.floor(hi * step) / step
        else:
            break
        previous = step
    # Float rounding must never pull a bound inside the data.
    return min(lo, data_lo), max(hi, data_hi)


def extent(values: Iterable[float]) -> Tuple[float, float]:
    finite = [v for v in values if is_finite(v)]
    if not finite:
        raise EmptyDomainError("Cannot build a domain from zero finite values")
    return min(finite), max(finite)


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: Number) -> Number:
        """Map a data value (or an array of them) to pixels."""
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


@dataclass(frozen=True)
class AxisScales:
    x_field: str
    y_field: str
    x: LinearScale
    y: LinearScale

    def project(self, record: Record) -> Tuple[float, float]:
        """Pixel position of a record as drawn on the chart."""
        return self.x(record.value(self.x_field)), self.y(record.value(self.y_field))


def linear_scale(values: Iterable[float], pixel_range: Tuple[float, float]) -> LinearScale:
    lo, hi = extent(values)
    return LinearScale(domain=nice_domain(lo, hi), range=pixel_range)


def build_scales(
    records: Sequence[Record],
    x_field: str,
    y_field: str,
    geometry: ChartGeometry,
) -> AxisScales:
    """
    Fit both axes to `records`. X grows left -> right, Y grows bottom -> top,
    i.e. its pixel range runs from inner_height down to 0.
    """
    return AxisScales(
        x_field=x_field,
        y_field=y_field,
        x=linear_scale((r.value(x_field) for r in records), (0.0, float(geometry.inner_width))),
        y=linear_scale((r.value(y_field) for r in records), (float(geometry.inner_height), 0.0)),
    )
