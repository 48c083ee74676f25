from __future__ import annotations

from dataclasses import dataclass

from widget_chart.colors import DEFAULT_PALETTE, RGBA


@dataclass(frozen=True)
class Padding:
    top: float = 40.0
    right: float = 40.0
    bottom: float = 50.0
    left: float = 60.0


@dataclass(frozen=True)
class ChartTheme:
    """Every tunable constant of the chart engine, in logical pixels unless noted."""

    padding: Padding = Padding()
    palette: tuple[RGBA, ...] = DEFAULT_PALETTE
    background: RGBA = (13, 13, 13, 255)
    grid_color: RGBA = (255, 255, 255, 38)
    axis_color: RGBA = (102, 102, 102, 255)
    axis_width: float = 2.0
    label_color: RGBA = (170, 170, 170, 255)
    title_color: RGBA = (230, 230, 230, 255)
    font_family: str = "Geist"
    tick_font_px: float = 11.0
    title_font_px: float = 14.0
    y_tick_count: int = 5
    max_x_labels: int = 10
    line_width: float = 2.5
    default_point_radius: float = 4.0
    bar_width_ratio: float = 0.6
    pie_radius_divisor: float = 2.5
    doughnut_hole_ratio: float = 0.6
    slice_outline_width: float = 2.0
    snap_threshold_px: float = 20.0
    crosshair_color: RGBA = (255, 255, 255, 128)
    crosshair_dash: tuple[int, int] = (5, 5)
    highlight_color: RGBA = (255, 255, 255, 255)
    highlight_radius: float = 5.0
    tooltip_offset: tuple[float, float] = (10.0, -30.0)
    error_color: RGBA = (234, 67, 53, 255)
    resize_debounce_s: float = 0.1

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if self.y_tick_count <= 0:
            raise ValueError("y_tick_count must be > 0")
        if self.max_x_labels <= 0:
            raise ValueError("max_x_labels must be > 0")
        if not 0.0 < self.bar_width_ratio <= 1.0:
            raise ValueError("bar_width_ratio must be in (0, 1]")
        if not 0.0 <= self.doughnut_hole_ratio < 1.0:
            raise ValueError("doughnut_hole_ratio must be in [0, 1)")
        if self.pie_radius_divisor <= 0:
            raise ValueError("pie_radius_divisor must be > 0")
        if self.snap_threshold_px <= 0:
            raise ValueError("snap_threshold_px must be > 0")
        if self.resize_debounce_s < 0:
            raise ValueError("resize_debounce_s must be >= 0")

    def palette_color(self, index: int) -> RGBA:
        return self.palette[index % len(self.palette)]


DEFAULT_THEME = ChartTheme()
