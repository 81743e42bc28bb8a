"""Timing helper for request latency."""
from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class Timer:
    name: str
    start: float | None = None
    elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:  # noqa: ANN001
        # Record the span even when the block raised.
        self.elapsed = time.perf_counter() - (self.start or time.perf_counter())
        return False

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0
