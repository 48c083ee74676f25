from __future__ import annotations

import logging
from typing import Callable, Protocol

import numpy as np

from widget_chart.errors import SurfaceError
from widget_chart.interaction import PointerEvent

LOGGER = logging.getLogger(__name__)


ResizeListener = Callable[[], None]
PointerListener = Callable[[PointerEvent], None]


class DrawingSurface(Protocol):
    """Minimum a host must offer; resize and pointer registration are optional extras."""

    width: float
    height: float
    device_pixel_ratio: float

    def present(self, rgba: np.ndarray) -> None:
        ...


def device_size(surface: DrawingSurface) -> tuple[int, int]:
    if surface.device_pixel_ratio <= 0:
        raise SurfaceError("device_pixel_ratio must be > 0")
    if surface.width <= 0 or surface.height <= 0:
        raise SurfaceError(f"surface size must be > 0, got {surface.width}x{surface.height}")
    w = max(1, int(round(surface.width * surface.device_pixel_ratio)))
    h = max(1, int(round(surface.height * surface.device_pixel_ratio)))
    return (w, h)


class RasterSurface:
    """In-memory drawing surface holding the last presented RGBA frame."""

    def __init__(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.device_pixel_ratio = float(device_pixel_ratio)
        device_size(self)
        self.rgba: np.ndarray | None = None
        self.revision = 0
        self._resize_listeners: list[ResizeListener] = []
        self._pointer_listeners: list[PointerListener] = []

    def present(self, rgba: np.ndarray) -> None:
        if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
            raise SurfaceError("frame must be uint8 with shape (H, W, 4)")
        self.rgba = rgba
        self.revision += 1

    def resize(self, width: float, height: float, device_pixel_ratio: float | None = None) -> None:
        previous = (self.width, self.height, self.device_pixel_ratio)
        self.width = float(width)
        self.height = float(height)
        if device_pixel_ratio is not None:
            self.device_pixel_ratio = float(device_pixel_ratio)
        try:
            device_size(self)
        except SurfaceError:
            self.width, self.height, self.device_pixel_ratio = previous
            raise
        if (self.width, self.height, self.device_pixel_ratio) == previous:
            return
        LOGGER.debug("surface resized to %sx%s @%sx", self.width, self.height, self.device_pixel_ratio)
        for listener in list(self._resize_listeners):
            listener()

    def add_resize_listener(self, listener: ResizeListener) -> None:
        if listener not in self._resize_listeners:
            self._resize_listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        if listener in self._resize_listeners:
            self._resize_listeners.remove(listener)

    def add_pointer_listener(self, listener: PointerListener) -> None:
        if listener not in self._pointer_listeners:
            self._pointer_listeners.append(listener)

    def remove_pointer_listener(self, listener: PointerListener) -> None:
        if listener in self._pointer_listeners:
            self._pointer_listeners.remove(listener)

    def dispatch_pointer(self, event: PointerEvent) -> None:
        for listener in list(self._pointer_listeners):
            listener(event)

    @property
    def listener_counts(self) -> tuple[int, int]:
        return (len(self._resize_listeners), len(self._pointer_listeners))
