from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal

import numpy as np

from dryroom_plot.options import ChartLayout, DrawMode, RenderOptions
from dryroom_plot.raster import (
    clear_canvas,
    draw_hline,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_area_under,
    fill_rect,
    text_size,
)
from dryroom_plot.scales import (
    AxisRange,
    ChartArea,
    GridLevel,
    decimate_time_indices,
    finite_runs,
    format_ticks_for_axis,
    gridline_levels,
    map_series,
    resolve_axis_range,
)
from dryroom_plot.series import HUMIDITY_STYLE, TEMPERATURE_STYLE, SeriesBundle, SeriesStyle
from dryroom_plot.surface import RenderSurface


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
SERIES_STYLES = {"temperature": TEMPERATURE_STYLE, "humidity": HUMIDITY_STYLE}


@dataclass(frozen=True, eq=False)
class PlottedSeries:
    style: SeriesStyle
    axis: AxisRange
    side: Literal["left", "right"]
    xs: np.ndarray
    ys: np.ndarray
    runs: tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class TextPlacement:
    x: int
    y: int
    text: str
    color: RGBA
    font_px: float
    embolden_px: int = 1


@dataclass(frozen=True)
class TimeTick:
    index: int
    x: float
    label: str


@dataclass(frozen=True)
class LegendItem:
    style: SeriesStyle
    swatch: tuple[int, int, int]
    text: TextPlacement


@dataclass(frozen=True, eq=False)
class ChartPlan:
    """Every coordinate of one chart, computed before any pixel is touched."""

    mode: DrawMode
    layout: ChartLayout
    area: ChartArea
    series: tuple[PlottedSeries, ...]
    gridlines: tuple[GridLevel, ...]
    value_labels: tuple[TextPlacement, ...]
    time_ticks: tuple[TimeTick, ...]
    time_labels: tuple[TextPlacement, ...]
    legend: tuple[LegendItem, ...]
    title: TextPlacement | None

    def series_for(self, key: str) -> PlottedSeries | None:
        for plotted in self.series:
            if plotted.style.key == key:
                return plotted
        return None


def render(
    target: RenderSurface,
    bundle: SeriesBundle,
    mode: DrawMode | str,
    options: RenderOptions | None = None,
) -> None:
    """Clear `target` and draw `bundle` on it in the given mode.

    An unrenderable bundle (fewer than two samples or misaligned sequences)
    leaves the surface cleared. `SurfaceUnavailableError` from the target
    propagates before any pixel changes.
    """
    mode = DrawMode(mode)
    options = options if options is not None else RenderOptions()
    layout = options.layout_for(mode)

    canvas = target.begin_frame()
    clear_canvas(canvas, layout.background)
    plan = plan_chart(target.width, target.height, bundle, mode, options)
    if plan is None:
        LOGGER.debug(
            "blank chart: mode=%s lengths=(%d, %d, %d) surface=%dx%d",
            mode.value,
            bundle.temperature.size,
            bundle.humidity.size,
            len(bundle.timestamps),
            target.width,
            target.height,
        )
    else:
        _paint(canvas, plan)
        LOGGER.debug("drew chart: mode=%s samples=%d surface=%dx%d", mode.value, len(bundle), target.width, target.height)
    target.commit_frame(canvas)


def plan_chart(
    width: int,
    height: int,
    bundle: SeriesBundle,
    mode: DrawMode | str,
    options: RenderOptions | None = None,
) -> ChartPlan | None:
    mode = DrawMode(mode)
    options = options if options is not None else RenderOptions()
    layout = options.layout_for(mode)
    if not bundle.is_renderable:
        return None
    area = ChartArea(width=width, height=height, padding=layout.padding)
    if not area.is_drawable:
        return None

    series: list[PlottedSeries] = []
    for side, key in zip(("left", "right"), mode.series_keys):
        values = bundle.values(key)
        axis = resolve_axis_range(values, options.range_for(key), options.bounds_for(key))
        xs, ys = map_series(values, axis, area)
        series.append(
            PlottedSeries(
                style=SERIES_STYLES[key],
                axis=axis,
                side=side,  # type: ignore[arg-type]
                xs=xs,
                ys=ys,
                runs=tuple(finite_runs(values)),
            )
        )

    gridlines = tuple(gridline_levels(series[0].axis, options.tick_count, area))
    xs = series[0].xs
    time_ticks = tuple(
        TimeTick(index=i, x=float(xs[i]), label=bundle.timestamps[i])
        for i in decimate_time_indices(len(bundle), options.max_time_labels)
    )

    value_labels: tuple[TextPlacement, ...] = ()
    if layout.show_value_labels:
        value_labels = tuple(
            label for plotted in series for label in _value_labels(plotted, options.tick_count, area, layout, mode)
        )
    time_labels: tuple[TextPlacement, ...] = ()
    if layout.show_time_labels:
        time_labels = tuple(_time_label(tick, area, layout) for tick in time_ticks)

    return ChartPlan(
        mode=mode,
        layout=layout,
        area=area,
        series=tuple(series),
        gridlines=gridlines,
        value_labels=value_labels,
        time_ticks=time_ticks,
        time_labels=time_labels,
        legend=_legend(series, area, layout),
        title=_title(mode, area, layout),
    )


def _value_labels(
    plotted: PlottedSeries,
    tick_count: int,
    area: ChartArea,
    layout: ChartLayout,
    mode: DrawMode,
) -> list[TextPlacement]:
    levels = gridline_levels(plotted.axis, tick_count, area)
    texts = format_ticks_for_axis([level.value for level in levels], unit=plotted.style.unit)
    # Dual-axis charts color each label column like its series.
    color = plotted.style.color if mode.is_dual_axis else layout.label_color
    out: list[TextPlacement] = []
    for level, text in zip(levels, texts, strict=True):
        tw, th = text_size(text, font_size_px=layout.tick_font_px)
        if plotted.side == "left":
            x = area.left - layout.label_gap_px - tw
        else:
            x = area.right + layout.label_gap_px
        y = int(round(level.y - th / 2))
        out.append(TextPlacement(x=max(0, x), y=y, text=text, color=color, font_px=layout.tick_font_px))
    return out


def _time_label(tick: TimeTick, area: ChartArea, layout: ChartLayout) -> TextPlacement:
    tw, _ = text_size(tick.label, font_size_px=layout.tick_font_px)
    return TextPlacement(
        x=int(round(tick.x - tw / 2)),
        y=area.bottom + layout.label_gap_px,
        text=tick.label,
        color=layout.label_color,
        font_px=layout.tick_font_px,
    )


def _title(mode: DrawMode, area: ChartArea, layout: ChartLayout) -> TextPlacement | None:
    if not layout.show_title:
        return None
    tw, th = text_size(mode.title, font_size_px=layout.title_font_px, embolden_px=2)
    return TextPlacement(
        x=max(0, (area.width - tw) // 2),
        y=max(0, (area.top - th) // 2),
        text=mode.title,
        color=layout.title_color,
        font_px=layout.title_font_px,
        embolden_px=2,
    )


def _legend(series: list[PlottedSeries], area: ChartArea, layout: ChartLayout) -> tuple[LegendItem, ...]:
    if len(series) < 2 or layout.legend == "none":
        return ()
    size = layout.legend_swatch_px
    text_gap = max(4, size * 2 // 3)
    item_gap = size * 3
    if layout.legend == "inline":
        y0 = max(0, min(area.top // 2, area.top - size))
    else:
        time_h = text_size("00:00", font_size_px=layout.tick_font_px)[1] if layout.show_time_labels else 0
        y0 = area.bottom + layout.label_gap_px + time_h + max(4, layout.label_gap_px // 2)
        y0 = max(0, min(y0, area.height - size - 1))

    items: list[LegendItem] = []
    x = area.left
    for plotted in series:
        text = plotted.style.short_label if layout.legend == "inline" else plotted.style.label
        tw, th = text_size(text, font_size_px=layout.legend_font_px)
        text_x = x + size + text_gap
        items.append(
            LegendItem(
                style=plotted.style,
                swatch=(x, y0, size),
                text=TextPlacement(
                    x=text_x,
                    y=y0 + (size - th) // 2,
                    text=text,
                    color=layout.legend_text_color,
                    font_px=layout.legend_font_px,
                ),
            )
        )
        x = text_x + tw + item_gap
    return tuple(items)


def _paint(canvas: np.ndarray, plan: ChartPlan) -> None:
    layout = plan.layout
    area = plan.area

    if layout.show_grid:
        for level in plan.gridlines:
            draw_hline(canvas, area.left, area.right, int(round(level.y)), layout.grid_color)
        for tick in plan.time_ticks:
            draw_vline(canvas, int(round(tick.x)), area.top, area.bottom, layout.grid_color)

    # Fills go down first so every stroke stays at its exact series color.
    if layout.fill:
        for plotted in plan.series:
            tint = (*plotted.style.color[:3], int(round(255 * layout.fill_alpha)))
            for start, end in plotted.runs:
                if end - start < 2:
                    continue
                fill_area_under(canvas, plotted.xs[start:end], plotted.ys[start:end], area.bottom, tint)

    for plotted in plan.series:
        for start, end in plotted.runs:
            if end - start < 2:
                continue
            draw_polyline(canvas, plotted.xs[start:end], plotted.ys[start:end], plotted.style.color, width=layout.line_width)

    for placement in (*plan.value_labels, *plan.time_labels):
        _draw_placement(canvas, placement)
    if plan.title is not None:
        _draw_placement(canvas, plan.title)
    for item in plan.legend:
        x0, y0, size = item.swatch
        fill_rect(canvas, x0, y0, x0 + size - 1, y0 + size - 1, item.style.color)
        _draw_placement(canvas, item.text)


def _draw_placement(canvas: np.ndarray, placement: TextPlacement) -> None:
    draw_text(
        canvas,
        placement.x,
        placement.y,
        placement.text,
        placement.color,
        font_size_px=placement.font_px,
        embolden_px=placement.embolden_px,
    )
