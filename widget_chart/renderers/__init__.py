from __future__ import annotations

from widget_chart.errors import ChartConfigError
from widget_chart.renderers.bar import BarRect, BarRenderer
from widget_chart.renderers.base import ChartLayout, DrawPass, Frame, HitTarget, SeriesRenderer
from widget_chart.renderers.line import LineRenderer, stroke_path
from widget_chart.renderers.pie import PieLayout, PieRenderer


def build_renderer_table() -> dict[str, SeriesRenderer]:
    table: dict[str, SeriesRenderer] = {}
    for renderer in (BarRenderer(), LineRenderer(), PieRenderer()):
        for kind in renderer.kinds:
            table[kind] = renderer
    return table


_DEFAULT_TABLE = build_renderer_table()


def renderer_for(kind: str, table: dict[str, SeriesRenderer] | None = None) -> SeriesRenderer:
    lookup = table if table is not None else _DEFAULT_TABLE
    try:
        return lookup[kind]
    except KeyError as exc:
        raise ChartConfigError(f"unsupported chart type: {kind!r}") from exc


__all__ = [
    "BarRect",
    "BarRenderer",
    "ChartLayout",
    "DrawPass",
    "Frame",
    "HitTarget",
    "LineRenderer",
    "PieLayout",
    "PieRenderer",
    "SeriesRenderer",
    "build_renderer_table",
    "renderer_for",
    "stroke_path",
]
