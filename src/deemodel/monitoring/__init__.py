"""Monitoring for deemodel: OpenTelemetry metrics of Clone traffic."""

from deemodel.monitoring.metrics import ModelMetrics, get_metrics

__all__ = [
    "ModelMetrics",
    "get_metrics",
]
