from __future__ import annotations

from typing import Sequence

from widget_chart.config import ChartConfig
from widget_chart.geometry import Point, PointGeometry, flatten_cubic, map_index_x, map_value_y, spline_segments
from widget_chart.raster import draw_markers, draw_polyline
from widget_chart.renderers.axes import paint_cartesian_axes
from widget_chart.renderers.base import ChartLayout, Frame, SeriesRenderer, paint_title
from widget_chart.scales import resolve_domain
from widget_chart.series import Series
from widget_chart.theme import ChartTheme


def stroke_path(points: Sequence[Point], tension: float, tolerance_px: float = 1.0) -> list[Point]:
    """Vertices of the stroked path through ``points``.

    With positive tension and more than two points the path follows the
    cubic spline chain; every input point is a vertex either way.
    """

    if tension > 0 and len(points) > 2:
        path: list[Point] = [points[0]]
        for segment in spline_segments(points, tension):
            path.extend(flatten_cubic(segment, tolerance_px=tolerance_px)[1:])
        return path
    return list(points)


class LineRenderer(SeriesRenderer):
    """Index-spaced line and scatter series with optional spline smoothing."""

    kinds = frozenset({"line", "scatter"})

    def layout(self, config: ChartConfig, width: float, height: float, theme: ChartTheme) -> ChartLayout:
        rect = self.plot_area(width, height, theme)
        domain = resolve_domain(config.kind, config.series)
        points = tuple(
            tuple(
                PointGeometry(
                    pixel_x=map_index_x(i, len(series.values), rect),
                    pixel_y=map_value_y(point.y, domain, rect),
                )
                for i, point in enumerate(series.values)
            )
            for series in config.series
        )
        return ChartLayout(width=width, height=height, rect=rect, domain=domain, points=points)

    def paint(self, frame: Frame, config: ChartConfig, layout: ChartLayout) -> None:
        rect = layout.rect
        paint_cartesian_axes(frame, config, layout, lambda i, count: map_index_x(i, count, rect))
        theme = frame.theme
        for series_index, (series, points) in enumerate(zip(config.series, layout.points)):
            if not points:
                continue
            color = series.resolved_color(series_index, theme)
            device_points = [frame.device(p.pixel_x, p.pixel_y) for p in points]
            if config.kind == "line":
                path = stroke_path(device_points, series.curve_tension)
                draw_polyline(frame.canvas, path, color, width=frame.px(theme.line_width))
            if self.draws_markers(config, series):
                draw_markers(frame.canvas, device_points, color, radius=frame.px(series.marker_radius(theme)))
        paint_title(frame, config, layout)

    @staticmethod
    def draws_markers(config: ChartConfig, series: Series) -> bool:
        return config.kind == "scatter" or series.show_discrete_points
