from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Iterable, Literal

import numpy as np

from widget_chart.config import ChartConfig
from widget_chart.raster import draw_dashed_vline, fill_circle
from widget_chart.renderers.base import DrawPass, HitTarget
from widget_chart.series import DataPoint

LOGGER = logging.getLogger(__name__)


PointerEventType = Literal["move", "leave"]
InteractionState = Literal["idle", "hovering"]


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in logical pixels relative to the surface's top-left corner."""

    event_type: PointerEventType
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class HitCandidate:
    pixel_x: float
    pixel_y: float
    series_index: int
    point_index: int
    category_label: str
    raw_value: DataPoint

    def describe(self) -> str:
        if self.category_label:
            return f"{self.category_label}: {self.raw_value.describe()}"
        return self.raw_value.describe()


@dataclass
class FloatingLabel:
    """Host-facing tooltip state; the host positions and paints it."""

    visible: bool = False
    text: str = ""
    x: float = 0.0
    y: float = 0.0

    def show(self, text: str, x: float, y: float) -> None:
        self.visible = True
        self.text = text
        self.x = x
        self.y = y

    def hide(self) -> None:
        self.visible = False
        self.text = ""


def find_hit_candidate(
    targets: Iterable[HitTarget],
    config: ChartConfig,
    pointer_x: float,
    *,
    device_pixel_ratio: float,
    snap_threshold_px: float,
) -> HitCandidate | None:
    """Nearest point by horizontal distance, compared in device pixels.

    Only distances strictly below ``snap_threshold_px * device_pixel_ratio``
    qualify; on ties the first target in iteration order wins.
    """

    pointer_device = pointer_x * device_pixel_ratio
    best: HitTarget | None = None
    best_dist = snap_threshold_px * device_pixel_ratio
    for target in targets:
        dist = abs(pointer_device - target.geometry.pixel_x * device_pixel_ratio)
        if dist < best_dist:
            best = target
            best_dist = dist
    if best is None:
        return None
    return HitCandidate(
        pixel_x=best.geometry.pixel_x,
        pixel_y=best.geometry.pixel_y,
        series_index=best.series_index,
        point_index=best.point_index,
        category_label=config.category_label(best.point_index),
        raw_value=config.series[best.series_index].values[best.point_index],
    )


class InteractionLayer:
    """Idle/hovering state machine that repaints the base chart on every pointer event."""

    def __init__(
        self,
        repaint: Callable[[], DrawPass | None],
        present: Callable[[np.ndarray], None],
        label: FloatingLabel | None = None,
    ) -> None:
        self._repaint = repaint
        self._present = present
        self.label = label if label is not None else FloatingLabel()
        self._state: InteractionState = "idle"
        self._hovered: HitCandidate | None = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def hovered(self) -> HitCandidate | None:
        return self._hovered

    def reset(self) -> None:
        self._state = "idle"
        self._hovered = None
        self.label.hide()

    def handle(self, event: PointerEvent) -> HitCandidate | None:
        draw = self._repaint()
        if draw is None or event.event_type == "leave":
            self.reset()
            if draw is not None:
                self._present(draw.frame.canvas)
            return None

        theme = draw.frame.theme
        candidate = find_hit_candidate(
            draw.renderer.hit_targets(draw.config, draw.layout),
            draw.config,
            event.x,
            device_pixel_ratio=draw.frame.dpr,
            snap_threshold_px=theme.snap_threshold_px,
        )
        if candidate is None:
            self.reset()
        else:
            self._paint_overlay(draw, candidate)
            dx, dy = theme.tooltip_offset
            self.label.show(candidate.describe(), candidate.pixel_x + dx, candidate.pixel_y + dy)
            self._state = "hovering"
            self._hovered = candidate
            LOGGER.debug("hover series=%d point=%d", candidate.series_index, candidate.point_index)
        self._present(draw.frame.canvas)
        return candidate

    @staticmethod
    def _paint_overlay(draw: DrawPass, candidate: HitCandidate) -> None:
        frame = draw.frame
        theme = frame.theme
        rect = draw.layout.rect
        dash, gap = theme.crosshair_dash
        draw_dashed_vline(
            frame.canvas,
            int(math.floor(frame.px(candidate.pixel_x))),
            int(math.floor(frame.px(rect.top))),
            int(math.floor(frame.px(rect.bottom))),
            theme.crosshair_color,
            dash=max(1, int(round(frame.px(dash)))),
            gap=max(0, int(round(frame.px(gap)))),
        )
        cx, cy = frame.device(candidate.pixel_x, candidate.pixel_y)
        fill_circle(frame.canvas, cx, cy, frame.px(theme.highlight_radius), theme.highlight_color)
