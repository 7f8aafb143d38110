from __future__ import annotations


class PlotError(Exception):
    """Base class for chart rendering errors."""


class PlotDataError(PlotError, ValueError):
    """Input series could not be coerced into a Series Bundle."""


class SurfaceUnavailableError(PlotError, RuntimeError):
    """The render target cannot hand out a drawable canvas."""
