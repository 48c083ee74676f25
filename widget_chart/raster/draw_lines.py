from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from widget_chart.raster.canvas import RGBA, blend_mask


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, width: float = 1.0) -> None:
    """Stroke connected segments through continuous device-pixel ``points``.

    The whole path is rasterized into one coverage mask before blending so
    overlapping brush stamps never darken translucent strokes.
    """

    if len(points) < 2:
        return
    height, width_px = dst.shape[0], dst.shape[1]
    mask = np.zeros((height, width_px), dtype=bool)
    pixels = [(int(math.floor(x)), int(math.floor(y))) for x, y in points]
    for (x0, y0), (x1, y1) in zip(pixels, pixels[1:]):
        _mark_segment(mask, x0, y0, x1, y1)
    radius = max(0, int(round(width)) // 2)
    if radius > 0:
        mask = _dilate(mask, radius)
    blend_mask(dst, 0, 0, mask, color)


def _mark_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    h, w = mask.shape

    while True:
        if 0 <= x0 < w and 0 <= y0 < h:
            mask[y0, x0] = True
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _dilate(mask: np.ndarray, radius: int) -> np.ndarray:
    # Square brush.
    out = mask.copy()
    h, w = mask.shape
    for oy in range(-radius, radius + 1):
        for ox in range(-radius, radius + 1):
            if ox == 0 and oy == 0:
                continue
            src = mask[max(0, -oy) : h - max(0, oy), max(0, -ox) : w - max(0, ox)]
            out[max(0, oy) : h - max(0, -oy), max(0, ox) : w - max(0, -ox)] |= src
    return out
