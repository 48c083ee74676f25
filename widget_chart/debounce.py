from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Callable


@dataclass
class TrailingDebouncer:
    """Collapses bursts of triggers into one trailing call.

    Nothing runs in the background: the host loop calls ``poll`` and the
    callback fires once ``delay_s`` has passed since the latest trigger.
    """

    delay_s: float
    callback: Callable[[], None]
    clock: Callable[[], float] = time.monotonic
    _deadline: float | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.delay_s < 0:
            raise ValueError("delay_s must be >= 0")

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def trigger(self) -> None:
        self._deadline = self.clock() + self.delay_s

    def cancel(self) -> None:
        self._deadline = None

    def poll(self, now: float | None = None) -> bool:
        if self._deadline is None:
            return False
        current = self.clock() if now is None else now
        if current < self._deadline:
            return False
        self._deadline = None
        self.callback()
        return True
