from __future__ import annotations

from collections.abc import Mapping
import logging
import time
from typing import Any, Callable, Union

import numpy as np

from widget_chart.config import ChartConfig, parse_chart_config, parse_chart_json
from widget_chart.debounce import TrailingDebouncer
from widget_chart.errors import ChartError, SurfaceError
from widget_chart.interaction import FloatingLabel, HitCandidate, InteractionLayer, PointerEvent
from widget_chart.legend import LegendRegion, synthesize_legend
from widget_chart.raster import draw_text, new_canvas, stroke_rect, text_size
from widget_chart.renderers import DrawPass, Frame, build_renderer_table, renderer_for
from widget_chart.surface import DrawingSurface, device_size
from widget_chart.theme import DEFAULT_THEME, ChartTheme

LOGGER = logging.getLogger(__name__)


ChartSource = Union[ChartConfig, Mapping[str, Any], str]


class ChartRenderer:
    """Owns one drawing surface and redraws it on config, resize and pointer changes.

    Every pointer event triggers a full base repaint followed by the hover
    overlay; charts are small enough that a cached base layer is not needed.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        legend_region: LegendRegion | None = None,
        *,
        theme: ChartTheme = DEFAULT_THEME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._surface = surface
        self._legend_region = legend_region
        self._theme = theme
        self._renderers = build_renderer_table()
        self._config: ChartConfig | None = None
        self._error: ChartError | None = None
        self._debouncer = TrailingDebouncer(theme.resize_debounce_s, self._on_resize_due, clock)
        self._interaction = InteractionLayer(repaint=self._draw_base, present=surface.present)
        self._mounted = False
        self._responsive = False
        self._interactive = False

    @property
    def config(self) -> ChartConfig | None:
        return self._config

    @property
    def error(self) -> ChartError | None:
        return self._error

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def responsive(self) -> bool:
        return self._responsive

    @property
    def interactive(self) -> bool:
        return self._interactive

    @property
    def hovered(self) -> HitCandidate | None:
        return self._interaction.hovered

    @property
    def label(self) -> FloatingLabel:
        return self._interaction.label

    @property
    def interaction(self) -> InteractionLayer:
        return self._interaction

    def mount(self, source: ChartSource) -> np.ndarray | None:
        if self._mounted:
            self.unmount()
        self._load(source)
        self._attach()
        return self.render()

    def update(self, source: ChartSource) -> np.ndarray | None:
        self._load(source)
        self._interaction.reset()
        return self.render()

    def unmount(self) -> None:
        if not self._mounted:
            return
        remove_resize = getattr(self._surface, "remove_resize_listener", None)
        if self._responsive and callable(remove_resize):
            remove_resize(self._on_resize)
        remove_pointer = getattr(self._surface, "remove_pointer_listener", None)
        if self._interactive and callable(remove_pointer):
            remove_pointer(self._on_pointer)
        self._debouncer.cancel()
        self._interaction.reset()
        self._mounted = False
        self._responsive = False
        self._interactive = False

    def render(self) -> np.ndarray | None:
        """Run one full draw pass, update the legend and present the frame."""

        draw = self._draw_base()
        if draw is not None:
            if self._legend_region is not None:
                self._legend_region.show(synthesize_legend(draw.config, self._theme))
            self._surface.present(draw.frame.canvas)
            return draw.frame.canvas
        if self._legend_region is not None:
            self._legend_region.show(())
        canvas = self._paint_error()
        if canvas is not None:
            self._surface.present(canvas)
        return canvas

    def poll(self, now: float | None = None) -> bool:
        """Flush a due debounced resize; returns True when a render ran."""

        return self._debouncer.poll(now)

    def handle_pointer(self, event: PointerEvent) -> HitCandidate | None:
        return self._interaction.handle(event)

    def _load(self, source: ChartSource) -> None:
        self._config = None
        self._error = None
        try:
            if isinstance(source, ChartConfig):
                source.validate()
                self._config = source
            elif isinstance(source, str):
                self._config = parse_chart_json(source)
            else:
                self._config = parse_chart_config(source)
        except ChartError as exc:
            LOGGER.warning("chart config rejected: %s", exc)
            self._error = exc

    def _attach(self) -> None:
        add_resize = getattr(self._surface, "add_resize_listener", None)
        if callable(add_resize):
            add_resize(self._on_resize)
            self._responsive = True
        else:
            LOGGER.debug("surface cannot report size changes; rendering once")
        add_pointer = getattr(self._surface, "add_pointer_listener", None)
        if callable(add_pointer):
            add_pointer(self._on_pointer)
            self._interactive = True
        self._mounted = True

    def _on_resize(self) -> None:
        self._debouncer.trigger()

    def _on_resize_due(self) -> None:
        self._interaction.reset()
        self.render()

    def _on_pointer(self, event: PointerEvent) -> None:
        self._interaction.handle(event)

    def _draw_base(self) -> DrawPass | None:
        config = self._config
        if config is None:
            return None
        try:
            width, height = device_size(self._surface)
            renderer = renderer_for(config.kind, self._renderers)
            frame = Frame(
                canvas=new_canvas(width, height, color=self._theme.background),
                dpr=float(self._surface.device_pixel_ratio),
                theme=self._theme,
            )
            layout = renderer.layout(config, float(self._surface.width), float(self._surface.height), self._theme)
            renderer.paint(frame, config, layout)
        except SurfaceError as exc:
            # Config stays; the next resize or render retries.
            LOGGER.warning("surface not drawable: %s", exc)
            self._error = exc
            return None
        except ChartError as exc:
            LOGGER.warning("chart render failed: %s", exc)
            self._config = None
            self._error = exc
            return None
        self._error = None
        return DrawPass(frame=frame, config=config, layout=layout, renderer=renderer)

    def _paint_error(self) -> np.ndarray | None:
        if self._error is None:
            return None
        try:
            width, height = device_size(self._surface)
        except ChartError as exc:
            LOGGER.warning("cannot paint error indicator: %s", exc)
            return None
        theme = self._theme
        dpr = float(self._surface.device_pixel_ratio)
        canvas = new_canvas(width, height, color=theme.background)
        inset = max(1, int(round(4 * dpr)))
        stroke_rect(canvas, inset, inset, width - 1 - inset, height - 1 - inset, theme.error_color)
        message = f"Visualization Error: {self._error}"
        font_px = theme.tick_font_px * dpr
        tw, th = text_size(message, font_family=theme.font_family, font_size_px=font_px)
        draw_text(
            canvas,
            max(inset * 3, (width - tw) // 2),
            max(inset * 3, (height - th) // 2),
            message,
            theme.error_color,
            font_family=theme.font_family,
            font_size_px=font_px,
        )
        return canvas


def render(
    surface: DrawingSurface,
    legend_region: LegendRegion | None,
    config: ChartSource,
    *,
    theme: ChartTheme = DEFAULT_THEME,
) -> ChartRenderer:
    """Mount a renderer on ``surface`` and perform the initial draw."""

    renderer = ChartRenderer(surface, legend_region, theme=theme)
    renderer.mount(config)
    return renderer
