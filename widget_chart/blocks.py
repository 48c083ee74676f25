from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from widget_chart.config import ChartConfig, parse_chart_json
from widget_chart.errors import ChartConfigError

LOGGER = logging.getLogger(__name__)

CHART_FENCE = re.compile(r"```chart[ \t]*\r?\n(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class ChartBlock:
    """One fenced chart block from a response; exactly one of config/error is set."""

    source: str
    start: int
    end: int
    config: ChartConfig | None = None
    error: ChartConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.config is not None

    @property
    def heading(self) -> str:
        if self.config is None:
            return "Chart"
        return f"{self.config.kind.capitalize()} Visualization"


def extract_chart_blocks(text: str) -> list[ChartBlock]:
    blocks: list[ChartBlock] = []
    for match in CHART_FENCE.finditer(text):
        source = match.group(1)
        try:
            config = parse_chart_json(source)
        except ChartConfigError as exc:
            LOGGER.info("skipping invalid chart block at %d: %s", match.start(), exc)
            blocks.append(ChartBlock(source=source, start=match.start(), end=match.end(), error=exc))
            continue
        blocks.append(ChartBlock(source=source, start=match.start(), end=match.end(), config=config))
    return blocks
