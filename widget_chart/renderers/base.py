from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from widget_chart.colors import RGBA
from widget_chart.config import ChartConfig
from widget_chart.geometry import PlotRect, PointGeometry, plot_rect
from widget_chart.raster import draw_text, text_size
from widget_chart.scales import ResolvedDomain
from widget_chart.theme import ChartTheme


@dataclass(frozen=True)
class ChartLayout:
    """Logical-pixel geometry for one draw pass."""

    width: float
    height: float
    rect: PlotRect
    domain: ResolvedDomain | None
    points: tuple[tuple[PointGeometry, ...], ...] = ()


@dataclass(frozen=True)
class Frame:
    """Device-pixel canvas plus the scale that maps logical coordinates onto it."""

    canvas: np.ndarray
    dpr: float
    theme: ChartTheme

    def px(self, value: float) -> float:
        return value * self.dpr

    def device(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.dpr, y * self.dpr)

    def text(self, x: float, y: float, text: str, color: RGBA, *, font_px: float, align: str = "left") -> None:
        """Draw ``text`` with its baseline-ish bottom at logical ``y``."""

        size_px = font_px * self.dpr
        w, h = text_size(text, font_family=self.theme.font_family, font_size_px=size_px)
        dx = self.px(x)
        if align == "center":
            dx -= w / 2.0
        elif align == "right":
            dx -= w
        draw_text(
            self.canvas,
            int(round(dx)),
            int(round(self.px(y) - h)),
            text,
            color,
            font_family=self.theme.font_family,
            font_size_px=size_px,
        )


@dataclass(frozen=True)
class DrawPass:
    """Everything one completed base draw produced; reused by the hover overlay."""

    frame: Frame
    config: ChartConfig
    layout: ChartLayout
    renderer: "SeriesRenderer"


@dataclass(frozen=True)
class HitTarget:
    series_index: int
    point_index: int
    geometry: PointGeometry


class SeriesRenderer(ABC):
    """Rendering strategy for one family of chart kinds."""

    kinds: frozenset[str] = frozenset()

    @abstractmethod
    def layout(self, config: ChartConfig, width: float, height: float, theme: ChartTheme) -> ChartLayout:
        raise NotImplementedError

    @abstractmethod
    def paint(self, frame: Frame, config: ChartConfig, layout: ChartLayout) -> None:
        raise NotImplementedError

    def hit_targets(self, config: ChartConfig, layout: ChartLayout) -> Iterator[HitTarget]:
        for series_index, points in enumerate(layout.points):
            for point_index, geometry in enumerate(points):
                yield HitTarget(series_index=series_index, point_index=point_index, geometry=geometry)

    def plot_area(self, width: float, height: float, theme: ChartTheme) -> PlotRect:
        return plot_rect(width, height, theme.padding)


def paint_title(frame: Frame, config: ChartConfig, layout: ChartLayout) -> None:
    if not config.title:
        return
    theme = frame.theme
    baseline = max(theme.title_font_px, layout.rect.top / 2.0 + theme.title_font_px / 2.0)
    frame.text(layout.width / 2.0, baseline, config.title, theme.title_color, font_px=theme.title_font_px, align="center")
