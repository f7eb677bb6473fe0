"""Per-stream timing and delivery counters."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streamed chat request.

    ``emitted`` counts deltas handed to the consumer; the two timings are in
    milliseconds relative to ``started``.
    """

    emitted: int = 0
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started: float = field(default_factory=time.perf_counter)

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000.0, 3)

    def record_delta(self) -> None:
        self.emitted += 1
        if self.time_to_first_delta_ms is None:
            self.time_to_first_delta_ms = self._elapsed_ms()

    def finish(self) -> None:
        if self.total_duration_ms is None:
            self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
