from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math

import numpy as np

from dryroom_plot.options import RangeSpec


@dataclass(frozen=True)
class AxisRange:
    vmin: float
    vmax: float

    @property
    def span(self) -> float:
        return self.vmax - self.vmin


@dataclass(frozen=True)
class ChartArea:
    """Plot rectangle left after removing `padding` on every side of the surface."""

    width: int
    height: int
    padding: int

    @property
    def chart_width(self) -> int:
        return self.width - 2 * self.padding

    @property
    def chart_height(self) -> int:
        return self.height - 2 * self.padding

    @property
    def left(self) -> int:
        return self.padding

    @property
    def top(self) -> int:
        return self.padding

    @property
    def right(self) -> int:
        return self.padding + self.chart_width

    @property
    def bottom(self) -> int:
        return self.padding + self.chart_height

    @property
    def is_drawable(self) -> bool:
        return self.chart_width >= 1 and self.chart_height >= 1


@dataclass(frozen=True)
class GridLevel:
    y: float
    value: float


def resolve_axis_range(values: np.ndarray, requested: RangeSpec, bounds: tuple[float, float]) -> AxisRange:
    """Pick the vertical scale for one series.

    "auto" widens the finite data extent to at least the domain floor/ceiling so
    flat or sparse data keeps a readable scale. Explicit ranges are used as given.
    A zero-height range becomes a unit range centred on the value.
    """
    if requested == "auto":
        floor, ceil = bounds
        finite = values[np.isfinite(values)]
        if finite.size:
            vmin = min(float(np.min(finite)), floor)
            vmax = max(float(np.max(finite)), ceil)
        else:
            vmin, vmax = floor, ceil
    else:
        vmin, vmax = float(requested[0]), float(requested[1])
    if vmax == vmin:
        return AxisRange(vmin=vmin - 0.5, vmax=vmax + 0.5)
    return AxisRange(vmin=vmin, vmax=vmax)


def sample_x_positions(n: int, area: ChartArea) -> np.ndarray:
    if n < 2:
        raise ValueError("at least two samples are required to span the chart width")
    step = area.chart_width / (n - 1)
    return area.left + np.arange(n, dtype=np.float64) * step


def map_values(values: np.ndarray, axis: AxisRange, area: ChartArea) -> np.ndarray:
    """Map sample values to pixel rows; NaN stays NaN, out-of-range values are clamped."""
    ratio = (values.astype(np.float64, copy=False) - axis.vmin) / axis.span
    ys = area.top + area.chart_height - ratio * area.chart_height
    with np.errstate(invalid="ignore"):
        return np.clip(ys, area.top, area.bottom)


def map_series(values: np.ndarray, axis: AxisRange, area: ChartArea) -> tuple[np.ndarray, np.ndarray]:
    return sample_x_positions(values.size, area), map_values(values, axis, area)


def gridline_levels(axis: AxisRange, tick_count: int, area: ChartArea) -> list[GridLevel]:
    if tick_count < 1:
        raise ValueError("tick_count must be >= 1")
    levels: list[GridLevel] = []
    for i in range(tick_count + 1):
        y = area.top + i * (area.chart_height / tick_count)
        value = axis.vmax - i * (axis.span / tick_count)
        levels.append(GridLevel(y=y, value=value))
    return levels


def decimate_time_indices(n: int, max_labels: int) -> list[int]:
    """Indices that get a time label: 0, step, 2*step, ... with step = ceil(n / max_labels)."""
    if max_labels < 1:
        raise ValueError("max_labels must be >= 1")
    if n <= 0:
        return []
    step = max(1, math.ceil(n / max_labels))
    return list(range(0, n, step))


def finite_runs(values: np.ndarray) -> list[tuple[int, int]]:
    """Half-open [start, end) index runs of consecutive finite samples."""
    idx = np.flatnonzero(np.isfinite(values))
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    decimals = _decimals_from_step(step) if step is not None else 6

    d = Decimal(repr(float(value)))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(values: list[float], *, unit: str = "") -> list[str]:
    if not values:
        return []
    if len(values) == 1:
        return [format_tick(float(values[0])) + unit]
    step = float(abs(values[1] - values[0]))
    return [format_tick(float(v), step=step) + unit for v in values]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    # Axis labels carry at most two decimals.
    d = Decimal(repr(float(step))).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(2, decimals)
