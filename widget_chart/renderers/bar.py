from __future__ import annotations

from dataclasses import dataclass

from widget_chart.colors import RGBA
from widget_chart.config import ChartConfig
from widget_chart.geometry import PointGeometry, bar_slot_width, map_bar_x, map_value_y
from widget_chart.raster import fill_rect
from widget_chart.renderers.axes import paint_cartesian_axes
from widget_chart.renderers.base import ChartLayout, Frame, SeriesRenderer, paint_title
from widget_chart.scales import resolve_domain
from widget_chart.theme import ChartTheme


@dataclass(frozen=True)
class BarRect:
    left: float
    top: float
    right: float
    bottom: float
    color: RGBA

    @property
    def height(self) -> float:
        return self.bottom - self.top


class BarRenderer(SeriesRenderer):
    """Categorical bars centered in equal-width slots.

    Every series draws at the slot center, so later series paint over
    earlier ones rather than being grouped side by side.
    """

    kinds = frozenset({"bar"})

    def layout(self, config: ChartConfig, width: float, height: float, theme: ChartTheme) -> ChartLayout:
        rect = self.plot_area(width, height, theme)
        domain = resolve_domain(config.kind, config.series)
        count = len(config.categories)
        points = tuple(
            tuple(
                PointGeometry(pixel_x=map_bar_x(i, count, rect), pixel_y=map_value_y(point.y, domain, rect))
                for i, point in enumerate(series.values)
            )
            for series in config.series
        )
        return ChartLayout(width=width, height=height, rect=rect, domain=domain, points=points)

    def bar_rects(self, config: ChartConfig, layout: ChartLayout, theme: ChartTheme) -> list[BarRect]:
        domain = layout.domain
        assert domain is not None
        baseline_value = min(max(0.0, domain.min), domain.max)
        baseline = map_value_y(baseline_value, domain, layout.rect)
        bar_w = bar_slot_width(len(config.categories), layout.rect) * theme.bar_width_ratio
        rects: list[BarRect] = []
        for series_index, (series, points) in enumerate(zip(config.series, layout.points)):
            color = series.bar_color(series_index, theme)
            for geometry in points:
                rects.append(
                    BarRect(
                        left=geometry.pixel_x - bar_w / 2.0,
                        top=min(geometry.pixel_y, baseline),
                        right=geometry.pixel_x + bar_w / 2.0,
                        bottom=max(geometry.pixel_y, baseline),
                        color=color,
                    )
                )
        return rects

    def paint(self, frame: Frame, config: ChartConfig, layout: ChartLayout) -> None:
        rect = layout.rect
        paint_cartesian_axes(frame, config, layout, lambda i, count: map_bar_x(i, count, rect))
        for bar in self.bar_rects(config, layout, frame.theme):
            fill_rect(
                frame.canvas,
                frame.px(bar.left),
                frame.px(bar.top),
                frame.px(bar.right),
                frame.px(bar.bottom),
                bar.color,
            )
        paint_title(frame, config, layout)
