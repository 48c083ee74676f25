from .canvas import (
    blend_mask,
    draw_dashed_vline,
    draw_hline,
    draw_vline,
    fill_canvas,
    fill_circle,
    fill_rect,
    new_canvas,
    stroke_rect,
)
from .draw_lines import draw_polyline
from .draw_markers import draw_markers
from .draw_text import draw_text, text_size
from .draw_wedges import fill_slices, slice_index_grid, stroke_ring

__all__ = [
    "blend_mask",
    "draw_dashed_vline",
    "draw_hline",
    "draw_markers",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_canvas",
    "fill_circle",
    "fill_rect",
    "fill_slices",
    "new_canvas",
    "slice_index_grid",
    "stroke_rect",
    "stroke_ring",
    "text_size",
]
