from widget_chart.blocks import ChartBlock, extract_chart_blocks
from widget_chart.config import ChartConfig, ChartKind, parse_chart_config, parse_chart_json
from widget_chart.errors import ChartConfigError, ChartError, SurfaceError
from widget_chart.interaction import FloatingLabel, HitCandidate, PointerEvent
from widget_chart.legend import HtmlLegendRegion, LegendEntry, RasterLegendRegion, synthesize_legend
from widget_chart.orchestrator import ChartRenderer, render
from widget_chart.scales import ResolvedDomain, resolve_domain
from widget_chart.series import DataPoint, Series
from widget_chart.surface import RasterSurface
from widget_chart.theme import DEFAULT_THEME, ChartTheme

__all__ = [
    "ChartBlock",
    "ChartConfig",
    "ChartConfigError",
    "ChartError",
    "ChartKind",
    "ChartRenderer",
    "ChartTheme",
    "DEFAULT_THEME",
    "DataPoint",
    "FloatingLabel",
    "HitCandidate",
    "HtmlLegendRegion",
    "LegendEntry",
    "PointerEvent",
    "RasterLegendRegion",
    "RasterSurface",
    "ResolvedDomain",
    "Series",
    "SurfaceError",
    "extract_chart_blocks",
    "parse_chart_config",
    "parse_chart_json",
    "render",
    "resolve_domain",
    "synthesize_legend",
]
