from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from dryroom_plot.raster.canvas import RGBA, blend_mask


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "arial",
    "helvetica",
    "liberationsans",
    "liberation sans",
    "freesans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("C:/Windows/Fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
) -> None:
    """Draw `text` with its ink box's top-left corner at (x, y)."""
    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    if embolden_px > 1:
        mask = _embolden(mask, embolden_px)
    blend_mask(dst, x, y, mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
) -> tuple[int, int]:
    if not text:
        return (0, max(1, int(round(font_size_px))))
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    left, top, right, bottom = font.getbbox(text)
    w = max(1, int(right - left)) + max(0, embolden_px - 1)
    h = max(1, int(bottom - top))
    return (w, h)


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    # Widen the mask so every shifted copy fits, then max-combine.
    out = np.zeros((mask.shape[0], mask.shape[1] + embolden_px - 1), dtype=np.uint8)
    for shift in range(embolden_px):
        view = out[:, shift : shift + mask.shape[1]]
        np.maximum(view, mask, out=view)
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    candidates.sort()

    for pattern in patterns:
        p = pattern.replace(" ", "")
        # Exact family file first so "dejavusans" does not resolve to a mono or bold cut.
        for path in candidates:
            if path.stem.lower().replace(" ", "") == p:
                return path
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem and "mono" not in stem:
                return path
    return None
