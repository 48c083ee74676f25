from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from widget_chart.raster.canvas import RGBA, blend_mask


def slice_index_grid(
    cx: float,
    cy: float,
    radius: float,
    angles: Sequence[tuple[float, float]],
) -> tuple[int, int, np.ndarray]:
    """Assign every pixel center inside the disk to exactly one slice.

    Returns ``(x0, y0, grid)`` where ``grid`` holds the slice index per pixel
    and ``-1`` outside the disk. Angles run clockwise in screen space.
    """

    x0 = int(math.floor(cx - radius))
    y0 = int(math.floor(cy - radius))
    x1 = int(math.ceil(cx + radius))
    y1 = int(math.ceil(cy + radius))
    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    inside = (dx * dx + dy * dy) <= radius * radius
    grid = np.full(inside.shape, -1, dtype=np.int32)
    if not angles:
        return x0, y0, grid

    start = angles[0][0]
    turn = 2.0 * math.pi
    offset = np.mod(np.arctan2(dy, dx) - start, turn)
    ends = np.asarray([end - start for _, end in angles], dtype=np.float64)
    ends[-1] = turn
    index = np.searchsorted(ends, offset, side="right")
    np.clip(index, 0, len(angles) - 1, out=index)
    grid[inside] = index[inside]
    return x0, y0, grid


def fill_slices(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    angles: Sequence[tuple[float, float]],
    colors: Sequence[RGBA],
) -> None:
    x0, y0, grid = slice_index_grid(cx, cy, radius, angles)
    for i, color in enumerate(colors):
        blend_mask(dst, x0, y0, grid == i, color)


def stroke_ring(dst: np.ndarray, cx: float, cy: float, radius: float, width: float, color: RGBA) -> None:
    half = max(0.5, width / 2.0)
    outer = radius + half
    x0 = int(math.floor(cx - outer))
    y0 = int(math.floor(cy - outer))
    x1 = int(math.ceil(cx + outer))
    y1 = int(math.ceil(cy + outer))
    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    dist = np.hypot(xs + 0.5 - cx, ys + 0.5 - cy)
    blend_mask(dst, x0, y0, np.abs(dist - radius) <= half, color)
