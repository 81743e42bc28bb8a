"""Prometheus integration.

Thin wrappers over prometheus_client that tolerate being constructed more
than once for the same metric name.
"""
from __future__ import annotations

from typing import Optional

from prometheus_client import Counter as _PCounter, Histogram as _PHist

# Cache created metrics to avoid duplicate registration errors when clients
# construct metric wrappers multiple times (e.g., one per requester or in tests).
_COUNTERS: dict[str, _PCounter] = {}
_HISTS: dict[str, _PHist] = {}


class Counter:
    def __init__(self, name: str, desc: str = "", labelnames: list[str] | None = None) -> None:
        self._name = name
        if name in _COUNTERS:
            self._c = _COUNTERS[name]
        else:
            self._c = _PCounter(name, desc, list(labelnames or []))
            _COUNTERS[name] = self._c

    def inc(self, amt: float = 1.0, **labels: str) -> None:
        if labels:
            self._c.labels(**labels).inc(amt)
        else:
            self._c.inc(amt)


class Histogram:
    def __init__(
        self,
        name: str,
        desc: str = "",
        labelnames: list[str] | None = None,
        buckets: Optional[list[float]] = None,
    ) -> None:
        self._name = name
        if name in _HISTS:
            self._h = _HISTS[name]
        else:
            if buckets is not None:
                self._h = _PHist(name, desc, list(labelnames or []), buckets=buckets)
            else:
                self._h = _PHist(name, desc, list(labelnames or []))
            _HISTS[name] = self._h

    def observe(self, val: float, **labels: str) -> None:
        if labels:
            self._h.labels(**labels).observe(val)
        else:
            self._h.observe(val)
