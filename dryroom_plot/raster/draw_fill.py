from __future__ import annotations

import numpy as np
from PIL import Image, ImageDraw

from dryroom_plot.raster.canvas import RGBA, blend_mask


def fill_area_under(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, baseline_y: float, color: RGBA) -> None:
    """Fill the region between a polyline and a horizontal baseline."""
    if xs.size < 2:
        return
    outline = list(zip(xs.tolist(), ys.tolist()))
    outline.append((float(xs[-1]), float(baseline_y)))
    outline.append((float(xs[0]), float(baseline_y)))
    fill_polygon(dst, outline, color)


def fill_polygon(dst: np.ndarray, points: list[tuple[float, float]], color: RGBA) -> None:
    if len(points) < 3:
        return
    height, width = dst.shape[:2]
    mask_image = Image.new("L", (width, height), 0)
    ImageDraw.Draw(mask_image).polygon([(float(x), float(y)) for x, y in points], fill=255)
    mask = np.asarray(mask_image, dtype=np.uint8)
    blend_mask(dst, 0, 0, mask, color)
