from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import json
from typing import Any, Literal, get_args

from widget_chart.adapters import normalize_points
from widget_chart.colors import RGBA, parse_color
from widget_chart.errors import ChartConfigError
from widget_chart.series import Series


ChartKind = Literal["bar", "line", "scatter", "pie", "doughnut"]

CHART_KINDS: tuple[str, ...] = get_args(ChartKind)
CARTESIAN_KINDS = frozenset({"bar", "line", "scatter"})
RADIAL_KINDS = frozenset({"pie", "doughnut"})
CATEGORY_ALIGNED_KINDS = frozenset({"bar", "line"})


@dataclass(frozen=True)
class ChartConfig:
    kind: ChartKind
    categories: tuple[str, ...]
    series: tuple[Series, ...]
    title: str | None = None

    @property
    def is_radial(self) -> bool:
        return self.kind in RADIAL_KINDS

    def validate(self) -> None:
        """Raise ``ChartConfigError`` when the config breaks a rendering invariant."""

        if self.kind not in CHART_KINDS:
            raise ChartConfigError(f"unsupported chart type: {self.kind!r}")
        if self.kind in CATEGORY_ALIGNED_KINDS:
            expected = len(self.categories)
            for i, series in enumerate(self.series):
                if len(series.values) != expected:
                    raise ChartConfigError(
                        f"dataset {i} has {len(series.values)} values but there are {expected} labels"
                    )
        if self.kind in RADIAL_KINDS:
            if not self.series:
                raise ChartConfigError(f"{self.kind} chart requires a dataset")
            if any(point.y < 0 for point in self.series[0].values):
                raise ChartConfigError(f"{self.kind} chart values must be >= 0")

    def category_label(self, index: int) -> str:
        if 0 <= index < len(self.categories):
            return self.categories[index]
        return ""


def parse_chart_json(text: str) -> ChartConfig:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ChartConfigError(f"invalid chart JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    return parse_chart_config(raw)


def parse_chart_config(raw: Any) -> ChartConfig:
    """Build a validated ``ChartConfig`` from a Chart.js-like mapping."""

    if not isinstance(raw, Mapping):
        raise ChartConfigError("chart config must be an object")

    kind = raw.get("type", raw.get("kind"))
    if not isinstance(kind, str) or kind.strip().lower() not in CHART_KINDS:
        raise ChartConfigError(f"unsupported chart type: {kind!r}")
    kind = kind.strip().lower()

    data = raw.get("data")
    if not isinstance(data, Mapping):
        raise ChartConfigError("chart config is missing 'data'")
    datasets = data.get("datasets")
    if not isinstance(datasets, Sequence) or isinstance(datasets, (str, bytes)):
        raise ChartConfigError("chart data is missing 'datasets'")

    labels = data.get("labels") or ()
    if not isinstance(labels, Sequence) or isinstance(labels, (str, bytes)):
        raise ChartConfigError("chart 'labels' must be a list")

    config = ChartConfig(
        kind=kind,  # type: ignore[arg-type]
        categories=tuple("" if label is None else str(label) for label in labels),
        series=tuple(_parse_dataset(ds, index=i) for i, ds in enumerate(datasets)),
        title=_parse_title(raw.get("options")),
    )
    config.validate()
    return config


def _parse_dataset(raw: Any, *, index: int) -> Series:
    if not isinstance(raw, Mapping):
        raise ChartConfigError(f"dataset {index} must be an object")
    if "data" not in raw:
        raise ChartConfigError(f"dataset {index} is missing 'data'")

    background = raw.get("backgroundColor")
    fill_color: RGBA | None = None
    slice_colors: tuple[RGBA, ...] = ()
    if isinstance(background, Sequence) and not isinstance(background, str):
        slice_colors = tuple(parse_color(c) for c in background)
    elif background is not None:
        fill_color = parse_color(background)

    border = raw.get("borderColor")
    stroke_color = parse_color(border) if border is not None else None

    tension = _parse_float(raw.get("tension", 0.0), field_name="tension", index=index)
    radius = raw.get("pointRadius")
    point_radius = None if radius is None else _parse_float(radius, field_name="pointRadius", index=index)
    if point_radius is not None and point_radius < 0:
        raise ChartConfigError(f"dataset {index} pointRadius must be >= 0")

    label = raw.get("label")
    return Series(
        name=None if label is None else str(label),
        values=normalize_points(raw["data"], label=f"datasets[{index}].data"),
        stroke_color=stroke_color,
        fill_color=fill_color,
        slice_colors=slice_colors,
        curve_tension=max(0.0, min(1.0, tension)),
        show_discrete_points=bool(raw.get("showPoints", False)),
        point_radius=point_radius,
    )


def _parse_float(value: Any, *, field_name: str, index: int) -> float:
    if isinstance(value, bool) or value is None:
        raise ChartConfigError(f"dataset {index} {field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ChartConfigError(f"dataset {index} {field_name} must be a number") from exc


def _parse_title(options: Any) -> str | None:
    if not isinstance(options, Mapping):
        return None
    title = options.get("title")
    if isinstance(title, Mapping):
        title = title.get("text")
    if title is None:
        return None
    text = str(title).strip()
    return text or None
