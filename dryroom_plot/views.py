"""Caller shells that own chart surfaces and decide when to redraw them.

Both shells redraw only on well-defined events: the preview when the bundle
reference changes, the detailed view when it opens or receives a new bundle
while open. A detailed tab that could not be drawn is retried on the next
state it receives. Neither retains chart data beyond the last bundle reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
import logging

from dryroom_plot.errors import SurfaceUnavailableError
from dryroom_plot.options import DETAILED_LAYOUT, PREVIEW_LAYOUT, DrawMode, RenderOptions
from dryroom_plot.renderer import render
from dryroom_plot.series import SeriesBundle
from dryroom_plot.surface import RasterSurface, RenderSurface


LOGGER = logging.getLogger(__name__)

DETAILED_TABS = (DrawMode.COMBINED, DrawMode.TEMPERATURE, DrawMode.HUMIDITY)


def _draw(surface: RenderSurface, bundle: SeriesBundle, mode: DrawMode, options: RenderOptions) -> bool:
    try:
        render(surface, bundle, mode, options)
    except SurfaceUnavailableError as exc:
        LOGGER.warning("chart surface unavailable; skipped %s draw: %s", mode.value, exc)
        return False
    return True


@dataclass
class PreviewChart:
    surface: RenderSurface = field(default_factory=lambda: RasterSurface(*PREVIEW_LAYOUT.preferred_size))
    options: RenderOptions = field(default_factory=RenderOptions)
    _drawn_bundle: SeriesBundle | None = field(default=None, init=False, repr=False)

    def update(self, bundle: SeriesBundle) -> bool:
        """Redraw if `bundle` is a different object than the last one drawn."""
        if bundle is self._drawn_bundle:
            return False
        if not _draw(self.surface, bundle, DrawMode.PREVIEW, self.options):
            return False
        self._drawn_bundle = bundle
        return True


@dataclass(frozen=True, eq=False)
class DetailedViewState:
    is_open: bool = False
    active_tab: DrawMode = DrawMode.COMBINED
    bundle: SeriesBundle | None = None

    def opened(self, bundle: SeriesBundle | None = None) -> "DetailedViewState":
        return replace(self, is_open=True, bundle=self.bundle if bundle is None else bundle)

    def closed(self) -> "DetailedViewState":
        return replace(self, is_open=False)

    def with_tab(self, tab: DrawMode | str) -> "DetailedViewState":
        mode = DrawMode(tab)
        if mode not in DETAILED_TABS:
            raise ValueError(f"detailed view has no {mode.value!r} tab")
        return replace(self, active_tab=mode)

    def with_bundle(self, bundle: SeriesBundle) -> "DetailedViewState":
        return replace(self, bundle=bundle)


class DetailedChartView:
    def __init__(
        self,
        surfaces: Mapping[DrawMode, RenderSurface] | None = None,
        options: RenderOptions | None = None,
    ) -> None:
        if surfaces is None:
            width, height = DETAILED_LAYOUT.preferred_size
            surfaces = {tab: RasterSurface(width, height) for tab in DETAILED_TABS}
        missing = [tab.value for tab in DETAILED_TABS if tab not in surfaces]
        if missing:
            raise ValueError(f"missing surfaces for tabs: {', '.join(missing)}")
        self.surfaces = dict(surfaces)
        self.options = options if options is not None else RenderOptions()
        self._state = DetailedViewState()
        self._stale: set[DrawMode] = set()

    @property
    def state(self) -> DetailedViewState:
        return self._state

    @property
    def active_surface(self) -> RenderSurface:
        return self.surfaces[self._state.active_tab]

    def apply(self, state: DetailedViewState) -> tuple[DrawMode, ...]:
        """Adopt `state` and redraw every tab if it opened or got a new bundle.

        Tabs whose surface was unavailable on the last draw are retried on every
        later call while the view stays open. Returns the tabs that were redrawn.
        """
        previous = self._state
        self._state = state
        if not state.is_open or state.bundle is None:
            return ()
        if previous.is_open and state.bundle is previous.bundle:
            tabs = tuple(tab for tab in DETAILED_TABS if tab in self._stale)
        else:
            tabs = DETAILED_TABS
        bundle = state.bundle
        drawn = tuple(tab for tab in tabs if _draw(self.surfaces[tab], bundle, tab, self.options))
        self._stale = {tab for tab in tabs if tab not in drawn}
        return drawn
