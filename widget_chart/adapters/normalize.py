from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import math
from typing import Any

import numpy as np

from widget_chart.errors import ChartConfigError
from widget_chart.series import DataPoint


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_points(values: Any, *, label: str = "data") -> tuple[DataPoint, ...]:
    """Coerce a dataset's ``data`` entry into data points.

    Entries may be plain numbers, numeric strings, or ``{x, y}`` mappings; a
    1-D numpy array or a pandas Series is accepted as a sequence of numbers.
    """

    if pd is not None and isinstance(values, pd.Series):
        values = values.to_numpy()
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ChartConfigError(f"{label} must be 1-D")
        if values.dtype.kind in {"i", "u", "f"}:
            return tuple(DataPoint(y=_finite(float(v), label=label, index=i)) for i, v in enumerate(values.tolist()))
        values = values.tolist()

    if not isinstance(values, Sequence) or isinstance(values, (str, bytes, bytearray)):
        raise ChartConfigError(f"{label} must be a list, got {type(values).__name__}")

    return tuple(_coerce_point(raw, label=label, index=i) for i, raw in enumerate(values))


def _coerce_point(raw: Any, *, label: str, index: int) -> DataPoint:
    if isinstance(raw, Mapping):
        if "y" not in raw:
            raise ChartConfigError(f"{label}[{index}] object is missing 'y'")
        y = _coerce_number(raw["y"], label=label, index=index)
        x = _coerce_number(raw["x"], label=label, index=index) if raw.get("x") is not None else None
        return DataPoint(y=y, x=x)
    return DataPoint(y=_coerce_number(raw, label=label, index=index))


def _coerce_number(raw: Any, *, label: str, index: int) -> float:
    if isinstance(raw, bool) or raw is None:
        raise ChartConfigError(f"{label}[{index}] is not numeric: {raw!r}")
    if isinstance(raw, Decimal):
        return _finite(float(raw), label=label, index=index)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ChartConfigError(f"{label}[{index}] is not numeric: {raw!r}") from exc
    return _finite(value, label=label, index=index)


def _finite(value: float, *, label: str, index: int) -> float:
    if not math.isfinite(value):
        raise ChartConfigError(f"{label}[{index}] is not finite: {value!r}")
    return value
