from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from widget_chart.colors import RGBA

if TYPE_CHECKING:
    from widget_chart.theme import ChartTheme


@dataclass(frozen=True)
class DataPoint:
    y: float
    x: float | None = None

    @property
    def is_xy(self) -> bool:
        return self.x is not None

    def describe(self) -> str:
        if self.x is not None:
            return f"({_format_number(self.x)}, {_format_number(self.y)})"
        return _format_number(self.y)


@dataclass(frozen=True)
class Series:
    name: str | None
    values: tuple[DataPoint, ...]
    stroke_color: RGBA | None = None
    fill_color: RGBA | None = None
    slice_colors: tuple[RGBA, ...] = ()
    curve_tension: float = 0.0
    show_discrete_points: bool = False
    point_radius: float | None = None

    def display_name(self, index: int) -> str:
        if self.name is not None and self.name.strip():
            return self.name
        return f"Series {index + 1}"

    def resolved_color(self, index: int, theme: "ChartTheme") -> RGBA:
        if self.stroke_color is not None:
            return self.stroke_color
        if self.fill_color is not None:
            return self.fill_color
        return theme.palette_color(index)

    def bar_color(self, index: int, theme: "ChartTheme") -> RGBA:
        if self.fill_color is not None:
            return self.fill_color
        return self.resolved_color(index, theme)

    def slice_color(self, slice_index: int, theme: "ChartTheme") -> RGBA:
        if slice_index < len(self.slice_colors):
            return self.slice_colors[slice_index]
        return theme.palette_color(slice_index)

    def marker_radius(self, theme: "ChartTheme") -> float:
        if self.point_radius is not None:
            return self.point_radius
        return theme.default_point_radius

    def y_values(self) -> list[float]:
        return [point.y for point in self.values]


def _format_number(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))
