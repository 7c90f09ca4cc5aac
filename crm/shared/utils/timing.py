"""
Server-Timing support

Collects per-stage elapsed milliseconds for a single request and renders
them as a Server-Timing header value.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

# Header order for known stages; unknown stages follow in recording order
STAGE_ORDER = ("conn", "verify", "query", "ser", "compute")


class ServerTiming:
    """Stage durations for one request"""

    def __init__(self):
        self._stages: Dict[str, float] = {}

    @staticmethod
    def now() -> float:
        return time.perf_counter()

    def record(self, stage: str, started_at: float) -> float:
        """Record the time elapsed since started_at under stage, in ms"""
        elapsed_ms = (time.perf_counter() - started_at) * 1000.0
        self._stages[stage] = elapsed_ms
        return elapsed_ms

    @contextmanager
    def measure(self, stage: str) -> Iterator[None]:
        """Time the enclosed block as stage"""
        started_at = self.now()
        try:
            yield
        finally:
            self.record(stage, started_at)

    def get(self, stage: str) -> Optional[float]:
        return self._stages.get(stage)

    def __contains__(self, stage: str) -> bool:
        return stage in self._stages

    def header_value(self, precision: int = 1) -> str:
        """Render as 'conn;dur=0.4, query;dur=1.2'"""
        known = [stage for stage in STAGE_ORDER if stage in self._stages]
        extra = [stage for stage in self._stages if stage not in STAGE_ORDER]
        return ", ".join(
            f"{stage};dur={self._stages[stage]:.{precision}f}" for stage in known + extra
        )

    def headers(self) -> Dict[str, str]:
        if not self._stages:
            return {}
        return {"server-timing": self.header_value()}
