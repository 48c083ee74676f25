from __future__ import annotations

from typing import Sequence

import numpy as np

from widget_chart.raster.canvas import RGBA, blend_mask, disk_mask


def draw_markers(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, radius: float) -> None:
    if radius <= 0:
        return
    coverage = np.zeros(dst.shape[:2], dtype=bool)
    for x, y in points:
        x0, y0, disk = disk_mask(x, y, max(radius, 0.5))
        _or_into(coverage, x0, y0, disk)
    blend_mask(dst, 0, 0, coverage, color)


def _or_into(coverage: np.ndarray, x0: int, y0: int, disk: np.ndarray) -> None:
    h, w = disk.shape
    xa = max(0, x0)
    ya = max(0, y0)
    xb = min(coverage.shape[1], x0 + w)
    yb = min(coverage.shape[0], y0 + h)
    if xa >= xb or ya >= yb:
        return
    coverage[ya:yb, xa:xb] |= disk[ya - y0 : yb - y0, xa - x0 : xb - x0]
