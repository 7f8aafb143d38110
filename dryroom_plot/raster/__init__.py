from .canvas import blend_mask, clear_canvas, draw_hline, draw_vline, fill_rect, new_canvas
from .draw_fill import fill_area_under, fill_polygon
from .draw_lines import draw_polyline
from .draw_text import draw_text, text_size

__all__ = [
    "blend_mask",
    "clear_canvas",
    "draw_hline",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_area_under",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "text_size",
]
