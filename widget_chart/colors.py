from __future__ import annotations

import re

from PIL import ImageColor

from widget_chart.errors import ChartConfigError


RGBA = tuple[int, int, int, int]

DEFAULT_PALETTE: tuple[RGBA, ...] = (
    (66, 133, 244, 255),
    (234, 67, 53, 255),
    (52, 168, 83, 255),
    (251, 188, 5, 255),
    (156, 39, 176, 255),
    (255, 152, 0, 255),
    (0, 188, 212, 255),
    (233, 30, 99, 255),
)

# CSS rgba() carries a 0..1 alpha which PIL's parser reads as 0..255.
_CSS_RGBA = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)$",
    re.IGNORECASE,
)


def parse_color(value: object) -> RGBA:
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = [int(c) for c in value]
        if any(c < 0 or c > 255 for c in channels):
            raise ChartConfigError(f"color channel out of range: {value!r}")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    if not isinstance(value, str) or not value.strip():
        raise ChartConfigError(f"unsupported color value: {value!r}")
    text = value.strip()
    if text.lower() == "transparent":
        return (0, 0, 0, 0)
    match = _CSS_RGBA.match(text)
    if match is not None:
        r, g, b = (min(255, int(match.group(i))) for i in (1, 2, 3))
        alpha = float(match.group(4))
        if alpha > 1.0:
            alpha = alpha / 255.0
        return (r, g, b, int(round(max(0.0, min(1.0, alpha)) * 255)))
    try:
        parsed = ImageColor.getrgb(text)
    except ValueError as exc:
        raise ChartConfigError(f"unsupported color value: {value!r}") from exc
    if len(parsed) == 3:
        return (parsed[0], parsed[1], parsed[2], 255)
    return (parsed[0], parsed[1], parsed[2], parsed[3])


def to_css(color: RGBA) -> str:
    r, g, b, a = color
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {a / 255.0:.3g})"
