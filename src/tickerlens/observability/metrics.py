"""
Defines Prometheus metrics for instrument lookups.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Re-importing this module (test reloads, multiple app instances) must not
# raise duplicate registration errors.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            # Registration lost the race, fall back to the now-existing collector.
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


METRICS: Dict[str, Any] = {
    "lookups_total": Counter(
        "tickerlens_lookups_total",
        "Instrument lookups by category and outcome",
        ["category", "outcome"],
    ),
    "fetch_latency_seconds": Histogram(
        "tickerlens_fetch_latency_seconds",
        "Latency of upstream page fetches",
        buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    ),
}


def record_lookup(category: str, outcome: str) -> None:
    """Count one finished lookup; ``outcome`` is ``ok`` or a failure kind."""
    METRICS["lookups_total"].labels(category=category, outcome=outcome).inc()


def observe_fetch_latency(seconds: float) -> None:
    METRICS["fetch_latency_seconds"].observe(seconds)
