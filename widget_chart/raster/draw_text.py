from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterator, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from widget_chart.raster.canvas import RGBA


Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

DEFAULT_FONT_FAMILY = "Geist"
DEFAULT_FONT_SIZE_PX = 11.0
SANS_FONT_FALLBACKS = (
    "geist",
    "inter",
    "helveticaneue",
    "helvetica",
    "arial",
    "dejavusans",
    "liberationsans",
    "notosans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
)
FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc"})


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Composite ``text`` with its tight bounding box's top-left at (x, y)."""

    if not text:
        return
    coverage = glyph_coverage(text, font_family, _pixel_size(font_size_px))
    _composite(dst, x, y, coverage, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    size = _pixel_size(font_size_px)
    if not text:
        ascent, descent = _font(font_family, size).getmetrics()
        return (0, max(1, int(ascent + descent)))
    h, w = glyph_coverage(text, font_family, size).shape
    return (w, h)


@lru_cache(maxsize=256)
def glyph_coverage(text: str, font_family: str, size: int) -> np.ndarray:
    """8-bit coverage mask of ``text`` cropped to its ink bounding box."""

    font = _font(font_family, size)
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


def _composite(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    # Canvases are opaque, so only color channels mix.
    h, w = coverage.shape
    xa, ya = max(0, x), max(0, y)
    xb, yb = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if xa >= xb or ya >= yb:
        return
    alpha = coverage[ya - y : yb - y, xa - x : xb - x].astype(np.float32) * (color[3] / (255.0 * 255.0))
    if not np.any(alpha > 0):
        return
    region = dst[ya:yb, xa:xb]
    current = region[:, :, :3].astype(np.float32)
    target = np.asarray(color[:3], dtype=np.float32)
    mixed = current + (target - current) * alpha[:, :, None]
    region[:, :, :3] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)
    region[:, :, 3] = 255


def _pixel_size(font_size_px: float) -> int:
    return max(1, int(round(font_size_px)))


@lru_cache(maxsize=64)
def _font(font_family: str, size: int) -> Font:
    path = _resolve_font_path(font_family.strip().lower() or DEFAULT_FONT_FAMILY.lower())
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(family: str) -> Path | None:
    by_stem: dict[str, Path] = {}
    for path in sorted(_font_files()):
        by_stem.setdefault(path.stem.lower().replace(" ", "").replace("-", ""), path)
    for wanted in (family,) + SANS_FONT_FALLBACKS:
        key = wanted.replace(" ", "").replace("-", "")
        exact = by_stem.get(key) or by_stem.get(key + "regular")
        if exact is not None:
            return exact
        for stem, path in by_stem.items():
            if stem.startswith(key):
                return path
    return None


def _font_files() -> Iterator[Path]:
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for path in base.rglob("*"):
            if path.suffix.lower() in FONT_SUFFIXES:
                yield path
