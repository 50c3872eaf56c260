"""Logging and metrics."""

from __future__ import annotations

from .logging import configure_logging
from .metrics import METRICS, observe_fetch_latency, record_lookup

__all__ = ["configure_logging", "METRICS", "observe_fetch_latency", "record_lookup", "export_prometheus"]


def export_prometheus() -> bytes:
    """Export metrics in Prometheus text format."""
    from prometheus_client import generate_latest

    return generate_latest()
