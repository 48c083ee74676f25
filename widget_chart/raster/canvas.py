from __future__ import annotations

import math

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill_canvas(canvas, color)
    return canvas


def fill_canvas(canvas: np.ndarray, color: RGBA) -> None:
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]


def blend_mask(dst: np.ndarray, x0: int, y0: int, mask: np.ndarray, color: RGBA) -> None:
    """Alpha-blend ``color`` into ``dst`` wherever ``mask`` (placed at x0, y0) is set."""

    h, w = mask.shape
    xa = max(0, x0)
    ya = max(0, y0)
    xb = min(dst.shape[1], x0 + w)
    yb = min(dst.shape[0], y0 + h)
    if xa >= xb or ya >= yb:
        return
    sub = mask[ya - y0 : yb - y0, xa - x0 : xb - x0]
    if not np.any(sub):
        return
    view = dst[ya:yb, xa:xb]
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32) * a
    current = view[sub][:, :3].astype(np.float32)
    blended = (src + current * (1.0 - a)).astype(np.uint8)
    view[sub, 0:3] = blended
    view[sub, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    """One-pixel horizontal run between x0 and x1 inclusive."""

    if 0 <= y < dst.shape[0]:
        lo, hi = _clip_span(x0, x1, dst.shape[1])
        if lo <= hi:
            _blend_run(dst[y, lo : hi + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if 0 <= x < dst.shape[1]:
        lo, hi = _clip_span(y0, y1, dst.shape[0])
        if lo <= hi:
            _blend_run(dst[lo : hi + 1, x], color)


def _clip_span(a: int, b: int, size: int) -> tuple[int, int]:
    return max(0, min(a, b)), min(size - 1, max(a, b))


def _blend_run(run: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32) * a
    run[:, :3] = (src + run[:, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    run[:, 3] = 255


def draw_dashed_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, *, dash: int, gap: int) -> None:
    if dash <= 0:
        raise ValueError("dash must be > 0")
    ya = min(y0, y1)
    yb = max(y0, y1)
    period = dash + max(0, gap)
    y = ya
    while y <= yb:
        draw_vline(dst, x, y, min(yb, y + dash - 1), color)
        y += period


def fill_rect(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA) -> None:
    """Fill every pixel whose center lies inside the continuous rectangle."""

    left = _first_pixel(min(x0, x1))
    right = _first_pixel(max(x0, x1))
    top = _first_pixel(min(y0, y1))
    bottom = _first_pixel(max(y0, y1))
    if right <= left or bottom <= top:
        return
    blend_mask(dst, left, top, np.ones((bottom - top, right - left), dtype=bool), color)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    draw_hline(dst, x0, x1, y0, color)
    draw_hline(dst, x0, x1, y1, color)
    draw_vline(dst, x0, y0 + 1, y1 - 1, color)
    draw_vline(dst, x1, y0 + 1, y1 - 1, color)


def disk_mask(cx: float, cy: float, radius: float) -> tuple[int, int, np.ndarray]:
    x0 = int(math.floor(cx - radius))
    y0 = int(math.floor(cy - radius))
    x1 = int(math.ceil(cx + radius))
    y1 = int(math.ceil(cy + radius))
    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    dx = xs + 0.5 - cx
    dy = ys + 0.5 - cy
    return x0, y0, (dx * dx + dy * dy) <= radius * radius


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    if radius <= 0:
        return
    x0, y0, mask = disk_mask(cx, cy, max(radius, 0.5))
    blend_mask(dst, x0, y0, mask, color)


def _first_pixel(edge: float) -> int:
    # Index of the first pixel whose center is at or past ``edge``.
    return int(math.ceil(edge - 0.5))
