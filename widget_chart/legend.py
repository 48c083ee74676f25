from __future__ import annotations

from dataclasses import dataclass
import html
import logging
import math
from typing import Protocol, Sequence

import numpy as np

from widget_chart.colors import RGBA, to_css
from widget_chart.config import ChartConfig
from widget_chart.raster import draw_text, fill_rect, new_canvas, text_size
from widget_chart.theme import DEFAULT_THEME, ChartTheme

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: RGBA


class LegendRegion(Protocol):
    def show(self, entries: Sequence[LegendEntry]) -> None:
        ...


def synthesize_legend(config: ChartConfig, theme: ChartTheme = DEFAULT_THEME) -> tuple[LegendEntry, ...]:
    """One entry per series, or per category for pie and doughnut charts."""

    if config.is_radial:
        if not config.series:
            return ()
        series = config.series[0]
        return tuple(
            LegendEntry(label=label, color=series.slice_color(i, theme)) for i, label in enumerate(config.categories)
        )
    return tuple(
        LegendEntry(label=series.display_name(i), color=series.resolved_color(i, theme))
        for i, series in enumerate(config.series)
    )


class HtmlLegendRegion:
    """Keeps legend markup for a host that owns a DOM-like companion region."""

    def __init__(self) -> None:
        self.markup = ""

    def show(self, entries: Sequence[LegendEntry]) -> None:
        self.markup = "".join(
            '<div class="legend-item">'
            f'<span class="legend-color" style="background:{to_css(entry.color)}"></span>'
            f'<span class="legend-text">{html.escape(entry.label)}</span>'
            "</div>"
            for entry in entries
        )


class RasterLegendRegion:
    """Paints centered, wrapping legend rows onto its own RGBA canvas."""

    def __init__(
        self,
        width: float,
        *,
        device_pixel_ratio: float = 1.0,
        theme: ChartTheme = DEFAULT_THEME,
        swatch_px: float = 12.0,
        item_gap_px: float = 15.0,
        pad_px: float = 10.0,
    ) -> None:
        if width <= 0:
            raise ValueError("legend width must be > 0")
        if device_pixel_ratio <= 0:
            raise ValueError("device_pixel_ratio must be > 0")
        self.width = float(width)
        self.device_pixel_ratio = float(device_pixel_ratio)
        self.theme = theme
        self.swatch_px = swatch_px
        self.item_gap_px = item_gap_px
        self.pad_px = pad_px
        self.entries: tuple[LegendEntry, ...] = ()
        self.rgba: np.ndarray = new_canvas(1, 1, color=theme.background)

    def show(self, entries: Sequence[LegendEntry]) -> None:
        self.entries = tuple(entries)
        dpr = self.device_pixel_ratio
        theme = self.theme
        font_px = theme.tick_font_px * dpr
        swatch = self.swatch_px * dpr
        text_gap = 6.0 * dpr
        item_gap = self.item_gap_px * dpr
        pad = self.pad_px * dpr
        width = max(1, int(round(self.width * dpr)))

        items = []
        for entry in self.entries:
            tw, th = text_size(entry.label, font_family=theme.font_family, font_size_px=font_px)
            items.append((entry, swatch + text_gap + tw, max(swatch, float(th))))

        rows: list[list[tuple[LegendEntry, float, float]]] = []
        row_w = 0.0
        for item in items:
            extra = item[1] if not rows else item_gap + item[1]
            if not rows or row_w + extra > width - 2 * pad:
                rows.append([])
                row_w = 0.0
                extra = item[1]
            rows[-1].append(item)
            row_w += extra

        row_h = max([swatch] + [item[2] for item in items])
        height = max(1, int(math.ceil(pad * 2 + len(rows) * row_h + max(0, len(rows) - 1) * item_gap / 2.0)))
        canvas = new_canvas(width, height, color=theme.background)
        y = pad
        for row in rows:
            total = sum(item[1] for item in row) + item_gap * (len(row) - 1)
            x = (width - total) / 2.0
            for entry, item_w, _ in row:
                top = y + (row_h - swatch) / 2.0
                fill_rect(canvas, x, top, x + swatch, top + swatch, entry.color)
                _, th = text_size(entry.label, font_family=theme.font_family, font_size_px=font_px)
                draw_text(
                    canvas,
                    int(round(x + swatch + text_gap)),
                    int(round(y + (row_h - th) / 2.0)),
                    entry.label,
                    theme.label_color,
                    font_family=theme.font_family,
                    font_size_px=font_px,
                )
                x += item_w + item_gap
            y += row_h + item_gap / 2.0
        self.rgba = canvas
        LOGGER.debug("legend painted: %d entries in %d rows", len(self.entries), len(rows))
