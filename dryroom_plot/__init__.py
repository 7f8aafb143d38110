from dryroom_plot.adapters import bundle_from_frame, bundle_from_mapping, normalize_bundle
from dryroom_plot.errors import PlotDataError, PlotError, SurfaceUnavailableError
from dryroom_plot.options import (
    DETAILED_LAYOUT,
    LAYOUT_PRESETS,
    PREVIEW_LAYOUT,
    ChartLayout,
    DrawMode,
    RenderOptions,
    load_options,
)
from dryroom_plot.renderer import ChartPlan, plan_chart, render
from dryroom_plot.series import HUMIDITY_STYLE, TEMPERATURE_STYLE, SeriesBundle, SeriesStyle
from dryroom_plot.surface import RasterSurface, RenderSurface, TensorSurface
from dryroom_plot.views import DetailedChartView, DetailedViewState, PreviewChart

__all__ = [
    "ChartLayout",
    "ChartPlan",
    "DETAILED_LAYOUT",
    "DetailedChartView",
    "DetailedViewState",
    "DrawMode",
    "HUMIDITY_STYLE",
    "LAYOUT_PRESETS",
    "PREVIEW_LAYOUT",
    "PlotDataError",
    "PlotError",
    "PreviewChart",
    "RasterSurface",
    "RenderOptions",
    "RenderSurface",
    "SeriesBundle",
    "SeriesStyle",
    "SurfaceUnavailableError",
    "TEMPERATURE_STYLE",
    "TensorSurface",
    "bundle_from_frame",
    "bundle_from_mapping",
    "load_options",
    "normalize_bundle",
    "plan_chart",
    "render",
]
