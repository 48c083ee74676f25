from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

import numpy as np

from widget_chart.series import Series


DOMAIN_HEADROOM_RATIO = 0.1
FALLBACK_DOMAIN = (0.0, 10.0)
FALLBACK_SPAN = 10.0
FLOATING_FLOOR_KINDS = frozenset({"line", "scatter"})


@dataclass(frozen=True)
class ResolvedDomain:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def collect_values(series: Iterable[Series]) -> np.ndarray:
    chunks = [np.asarray(s.y_values(), dtype=np.float64) for s in series if s.values]
    if not chunks:
        return np.zeros(0, dtype=np.float64)
    return np.concatenate(chunks)


def resolve_domain(kind: str, series: Iterable[Series]) -> ResolvedDomain:
    """Derive the value-axis domain with 10% headroom.

    Non-negative bar data keeps a zero floor; line and scatter data float the
    floor below the minimum so points never sit on the axis. When every value
    is equal the span is ``abs(max)`` (10 for zero) so the domain never inverts.
    """

    values = collect_values(series)
    if values.size == 0:
        return ResolvedDomain(*FALLBACK_DOMAIN)

    vmin = float(np.min(values))
    vmax = float(np.max(values))
    span = vmax - vmin
    if span == 0.0:
        span = abs(vmax) if vmax != 0.0 else FALLBACK_SPAN

    pad = span * DOMAIN_HEADROOM_RATIO
    floor = 0.0 if vmin >= 0.0 else vmin - pad
    if kind in FLOATING_FLOOR_KINDS:
        floor = vmin - pad
    return ResolvedDomain(min=floor, max=vmax + pad)


def pie_total(series: Series) -> float:
    return float(sum(series.y_values()))


def value_ticks(domain: ResolvedDomain, divisions: int) -> np.ndarray:
    if divisions <= 0:
        raise ValueError("divisions must be > 0")
    steps = np.arange(divisions + 1, dtype=np.float64) / float(divisions)
    return domain.min + steps * domain.span


def format_tick(value: float, decimals: int = 1) -> str:
    if not np.isfinite(value):
        return str(value)
    quant = Decimal("1").scaleb(-decimals)
    try:
        out = format(Decimal(repr(float(value))).quantize(quant, rounding=ROUND_HALF_UP), "f")
    except InvalidOperation:
        out = f"{value:.{decimals}f}"
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out
