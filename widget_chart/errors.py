from __future__ import annotations


class ChartError(Exception):
    """Base class for errors raised by the chart engine."""


class ChartConfigError(ChartError):
    """Raised when a chart description cannot be rendered as given."""


class SurfaceError(ChartError):
    """Raised when a drawing surface has unusable geometry."""
