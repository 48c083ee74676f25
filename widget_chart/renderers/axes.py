from __future__ import annotations

import math

from widget_chart.config import ChartConfig
from widget_chart.geometry import map_value_y
from widget_chart.raster import draw_hline, fill_rect
from widget_chart.renderers.base import ChartLayout, Frame
from widget_chart.scales import format_tick, value_ticks


def label_stride(count: int, max_labels: int) -> int:
    if count <= max_labels:
        return 1
    return int(math.ceil(count / max_labels))


def paint_cartesian_axes(frame: Frame, config: ChartConfig, layout: ChartLayout, x_for_category) -> None:
    """Grid, value ticks, axis lines and category labels shared by bar and line charts."""

    theme = frame.theme
    rect = layout.rect
    domain = layout.domain
    assert domain is not None

    left = int(math.floor(frame.px(rect.left)))
    right = int(math.floor(frame.px(rect.right)))
    for value in value_ticks(domain, theme.y_tick_count).tolist():
        y = map_value_y(value, domain, rect)
        draw_hline(frame.canvas, left, right, int(math.floor(frame.px(y))), theme.grid_color)
        frame.text(
            rect.left - 10.0,
            y + 4.0,
            format_tick(value),
            theme.label_color,
            font_px=theme.tick_font_px,
            align="right",
        )

    half = theme.axis_width / 2.0
    fill_rect(
        frame.canvas,
        frame.px(rect.left - half),
        frame.px(rect.top),
        frame.px(rect.left + half),
        frame.px(rect.bottom),
        theme.axis_color,
    )
    fill_rect(
        frame.canvas,
        frame.px(rect.left),
        frame.px(rect.bottom - half),
        frame.px(rect.right),
        frame.px(rect.bottom + half),
        theme.axis_color,
    )

    count = len(config.categories)
    stride = label_stride(count, theme.max_x_labels)
    for i, label in enumerate(config.categories):
        if i % stride != 0:
            continue
        frame.text(
            x_for_category(i, count),
            rect.bottom + 20.0,
            label,
            theme.label_color,
            font_px=theme.tick_font_px,
            align="center",
        )
