from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterator

from widget_chart.config import ChartConfig
from widget_chart.geometry import Point, slice_angles
from widget_chart.raster import draw_polyline, fill_circle, fill_slices, stroke_ring
from widget_chart.renderers.base import ChartLayout, Frame, HitTarget, SeriesRenderer, paint_title
from widget_chart.theme import ChartTheme


@dataclass(frozen=True)
class PieLayout(ChartLayout):
    center: Point = (0.0, 0.0)
    radius: float = 0.0
    angles: tuple[tuple[float, float], ...] = ()


class PieRenderer(SeriesRenderer):
    """Proportional slices of the first dataset, clockwise from 12 o'clock."""

    kinds = frozenset({"pie", "doughnut"})

    def layout(self, config: ChartConfig, width: float, height: float, theme: ChartTheme) -> PieLayout:
        rect = self.plot_area(width, height, theme)
        values = config.series[0].y_values() if config.series else []
        return PieLayout(
            width=width,
            height=height,
            rect=rect,
            domain=None,
            center=(width / 2.0, height / 2.0),
            radius=min(rect.width, rect.height) / theme.pie_radius_divisor,
            angles=tuple(slice_angles(values)),
        )

    def hit_targets(self, config: ChartConfig, layout: ChartLayout) -> Iterator[HitTarget]:
        return iter(())

    def paint(self, frame: Frame, config: ChartConfig, layout: ChartLayout) -> None:
        assert isinstance(layout, PieLayout)
        theme = frame.theme
        if layout.angles and layout.radius > 0:
            series = config.series[0]
            cx, cy = frame.device(*layout.center)
            radius = frame.px(layout.radius)
            colors = [series.slice_color(i, theme) for i in range(len(layout.angles))]
            fill_slices(frame.canvas, cx, cy, radius, layout.angles, colors)

            outline = frame.px(theme.slice_outline_width)
            if len(layout.angles) > 1:
                for start, _ in layout.angles:
                    edge = (cx + radius * math.cos(start), cy + radius * math.sin(start))
                    draw_polyline(frame.canvas, [(cx, cy), edge], theme.background, width=outline)
            stroke_ring(frame.canvas, cx, cy, radius, outline, theme.background)

            if config.kind == "doughnut":
                fill_circle(frame.canvas, cx, cy, radius * theme.doughnut_hole_ratio, theme.background)
        paint_title(frame, config, layout)
