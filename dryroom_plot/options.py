from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
import math
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from dryroom_plot.series import SeriesKey


RGBA = tuple[int, int, int, int]
LegendPlacement = Literal["inline", "below", "none"]
RangeSpec = tuple[float, float] | Literal["auto"]

LEGEND_PLACEMENTS = ("inline", "below", "none")


class DrawMode(str, Enum):
    PREVIEW = "preview"
    TEMPERATURE = "temperature-only"
    HUMIDITY = "humidity-only"
    COMBINED = "combined"

    @property
    def series_keys(self) -> tuple[SeriesKey, ...]:
        if self is DrawMode.TEMPERATURE:
            return ("temperature",)
        if self is DrawMode.HUMIDITY:
            return ("humidity",)
        return ("temperature", "humidity")

    @property
    def title(self) -> str:
        return _MODE_TITLES[self]

    @property
    def is_dual_axis(self) -> bool:
        return len(self.series_keys) > 1


_MODE_TITLES = {
    DrawMode.PREVIEW: "Temperature & Humidity",
    DrawMode.TEMPERATURE: "Temperature Over Time",
    DrawMode.HUMIDITY: "Humidity Over Time",
    DrawMode.COMBINED: "Temperature & Humidity",
}


@dataclass(frozen=True)
class ChartLayout:
    """Visual budget of one call site: margins, decorations and colors."""

    padding: int
    fill: bool
    legend: LegendPlacement
    show_title: bool
    show_value_labels: bool
    show_time_labels: bool
    line_width: int
    preferred_size: tuple[int, int]
    show_grid: bool = True
    fill_alpha: float = 0.1
    tick_font_px: float = 12.0
    title_font_px: float = 16.0
    legend_font_px: float = 14.0
    legend_swatch_px: int = 15
    label_gap_px: int = 10
    background: RGBA = (255, 255, 255, 255)
    grid_color: RGBA = (229, 231, 235, 255)
    label_color: RGBA = (107, 114, 128, 255)
    title_color: RGBA = (17, 24, 39, 255)
    legend_text_color: RGBA = (17, 24, 39, 255)

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValueError("padding must be >= 0")
        if self.line_width < 1:
            raise ValueError("line_width must be >= 1")
        if not 0.0 <= self.fill_alpha <= 1.0:
            raise ValueError("fill_alpha must be in [0, 1]")
        if self.legend not in LEGEND_PLACEMENTS:
            raise ValueError(f"legend must be one of {LEGEND_PLACEMENTS}, got {self.legend!r}")
        if self.legend_swatch_px < 1:
            raise ValueError("legend_swatch_px must be >= 1")
        if self.preferred_size[0] <= 0 or self.preferred_size[1] <= 0:
            raise ValueError("preferred_size must be positive")
        for name in ("tick_font_px", "title_font_px", "legend_font_px"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")


PREVIEW_LAYOUT = ChartLayout(
    padding=20,
    fill=False,
    legend="inline",
    show_title=False,
    show_value_labels=False,
    show_time_labels=False,
    line_width=2,
    preferred_size=(400, 140),
    legend_font_px=10.0,
    legend_swatch_px=10,
)

DETAILED_LAYOUT = ChartLayout(
    padding=40,
    fill=True,
    legend="below",
    show_title=True,
    show_value_labels=True,
    show_time_labels=True,
    line_width=3,
    preferred_size=(1000, 500),
)

LAYOUT_PRESETS = {"preview": PREVIEW_LAYOUT, "detailed": DETAILED_LAYOUT}


@dataclass(frozen=True)
class RenderOptions:
    temp_range: RangeSpec = "auto"
    humidity_range: RangeSpec = "auto"
    tick_count: int = 5
    max_time_labels: int = 10
    temp_bounds: tuple[float, float] = (65.0, 85.0)
    humidity_bounds: tuple[float, float] = (30.0, 80.0)
    layout: ChartLayout | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "temp_range", _coerce_range(self.temp_range, "temp_range"))
        object.__setattr__(self, "humidity_range", _coerce_range(self.humidity_range, "humidity_range"))
        object.__setattr__(self, "temp_bounds", _coerce_pair(self.temp_bounds, "temp_bounds"))
        object.__setattr__(self, "humidity_bounds", _coerce_pair(self.humidity_bounds, "humidity_bounds"))
        if isinstance(self.tick_count, bool) or int(self.tick_count) < 1:
            raise ValueError("tick_count must be >= 1")
        if isinstance(self.max_time_labels, bool) or int(self.max_time_labels) < 1:
            raise ValueError("max_time_labels must be >= 1")
        object.__setattr__(self, "tick_count", int(self.tick_count))
        object.__setattr__(self, "max_time_labels", int(self.max_time_labels))

    def layout_for(self, mode: DrawMode | str) -> ChartLayout:
        if self.layout is not None:
            return self.layout
        return PREVIEW_LAYOUT if DrawMode(mode) is DrawMode.PREVIEW else DETAILED_LAYOUT

    def range_for(self, key: SeriesKey) -> RangeSpec:
        return self.temp_range if key == "temperature" else self.humidity_range

    def bounds_for(self, key: SeriesKey) -> tuple[float, float]:
        return self.temp_bounds if key == "temperature" else self.humidity_bounds


def load_options(path: str | Path) -> RenderOptions:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"render options file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return options_from_mapping(raw)


def options_from_mapping(raw: Mapping[str, Any]) -> RenderOptions:
    known = {f.name for f in fields(RenderOptions)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown render option(s): {', '.join(unknown)}")
    kwargs = dict(raw)
    if "layout" in kwargs:
        kwargs["layout"] = layout_from_mapping(kwargs["layout"])
    for key in ("temp_bounds", "humidity_bounds"):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])
    return RenderOptions(**kwargs)


def layout_from_mapping(raw: Mapping[str, Any]) -> ChartLayout:
    if not isinstance(raw, Mapping):
        raise ValueError("layout must be a table")
    values = dict(raw)
    base_name = str(values.pop("base", "detailed"))
    if base_name not in LAYOUT_PRESETS:
        raise ValueError(f"unknown layout base: {base_name!r}")
    known = {f.name for f in fields(ChartLayout)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"unknown layout option(s): {', '.join(unknown)}")
    for key, value in list(values.items()):
        if isinstance(value, list):
            values[key] = tuple(int(v) for v in value)
    return replace(LAYOUT_PRESETS[base_name], **values)


def _coerce_range(value: Any, label: str) -> RangeSpec:
    if isinstance(value, str):
        if value != "auto":
            raise ValueError(f"{label} must be 'auto' or a (min, max) pair")
        return "auto"
    return _coerce_pair(value, label)


def _coerce_pair(value: Any, label: str) -> tuple[float, float]:
    try:
        low, high = (float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be a (min, max) pair") from exc
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError(f"{label} must be finite")
    if low > high:
        raise ValueError(f"{label} min must be <= max")
    return (low, high)
