from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from widget_chart.scales import ResolvedDomain
from widget_chart.theme import Padding


Point = tuple[float, float]

PIE_START_ANGLE = -math.pi / 2.0
FULL_TURN = 2.0 * math.pi


@dataclass(frozen=True)
class PlotRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)


@dataclass(frozen=True)
class PointGeometry:
    pixel_x: float
    pixel_y: float


@dataclass(frozen=True)
class CubicSegment:
    start: Point
    control1: Point
    control2: Point
    end: Point


def plot_rect(width: float, height: float, padding: Padding) -> PlotRect:
    return PlotRect(
        left=padding.left,
        top=padding.top,
        width=max(0.0, width - padding.left - padding.right),
        height=max(0.0, height - padding.top - padding.bottom),
    )


def map_value_y(value: float, domain: ResolvedDomain, rect: PlotRect) -> float:
    return rect.bottom - ((value - domain.min) / domain.span) * rect.height


def map_index_x(index: int, count: int, rect: PlotRect) -> float:
    divisions = (count - 1) or 1
    return rect.left + index * (rect.width / divisions)


def bar_slot_width(count: int, rect: PlotRect) -> float:
    return rect.width / count if count > 0 else rect.width


def map_bar_x(index: int, count: int, rect: PlotRect) -> float:
    slot = bar_slot_width(count, rect)
    return rect.left + index * slot + slot / 2.0


def spline_segments(points: Sequence[Point], tension: float) -> list[CubicSegment]:
    """Catmull-Rom style Bézier chain through ``points``.

    Each segment p1 -> p2 takes its control points from the neighbors p0 and
    p3; the windows at either end reuse the first/last point.
    """

    segments: list[CubicSegment] = []
    last = len(points) - 1
    k = tension / 6.0
    for i in range(last):
        p0 = points[i - 1] if i > 0 else points[i]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[i + 2] if i + 2 <= last else points[i + 1]
        c1 = (p1[0] + (p2[0] - p0[0]) * k, p1[1] + (p2[1] - p0[1]) * k)
        c2 = (p2[0] - (p3[0] - p1[0]) * k, p2[1] - (p3[1] - p1[1]) * k)
        segments.append(CubicSegment(start=p1, control1=c1, control2=c2, end=p2))
    return segments


def cubic_point(segment: CubicSegment, t: float) -> Point:
    u = 1.0 - t
    a = u * u * u
    b = 3.0 * u * u * t
    c = 3.0 * u * t * t
    d = t * t * t
    return (
        a * segment.start[0] + b * segment.control1[0] + c * segment.control2[0] + d * segment.end[0],
        a * segment.start[1] + b * segment.control1[1] + c * segment.control2[1] + d * segment.end[1],
    )


def flatten_cubic(segment: CubicSegment, tolerance_px: float = 1.0) -> list[Point]:
    # Control polygon length bounds the arc length.
    hull = (
        math.dist(segment.start, segment.control1)
        + math.dist(segment.control1, segment.control2)
        + math.dist(segment.control2, segment.end)
    )
    steps = max(1, min(256, int(math.ceil(hull / max(tolerance_px, 1e-3)))))
    out = [segment.start]
    for i in range(1, steps):
        out.append(cubic_point(segment, i / steps))
    out.append(segment.end)
    return out


def slice_angles(values: Sequence[float], start: float = PIE_START_ANGLE) -> list[tuple[float, float]]:
    """Clockwise (start, end) angles in radians for each value's share of a full turn."""

    total = float(sum(values))
    if total <= 0.0:
        return []
    out: list[tuple[float, float]] = []
    running = 0.0
    angle = start
    for i, value in enumerate(values):
        running += float(value)
        end = start + FULL_TURN if i == len(values) - 1 else start + FULL_TURN * (running / total)
        out.append((angle, end))
        angle = end
    return out
