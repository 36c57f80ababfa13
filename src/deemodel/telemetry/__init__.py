"""OpenTelemetry helpers for instrumentation.

Spans and instruments are created against whatever providers the host
application installed; without one they are no-ops.
"""

from typing import Optional

from opentelemetry import metrics, trace

from deemodel.__version__ import __version__

__all__ = [
    "INSTRUMENTATION_SCOPE",
    "get_tracer",
    "get_meter",
]

INSTRUMENTATION_SCOPE = "deemodel"


def get_tracer(name: str = INSTRUMENTATION_SCOPE, version: Optional[str] = None) -> trace.Tracer:
    """Return a tracer from the active OpenTelemetry provider."""
    return trace.get_tracer(name, version or __version__)


def get_meter(name: str = INSTRUMENTATION_SCOPE, version: Optional[str] = None) -> metrics.Meter:
    """Return a meter from the active OpenTelemetry provider."""
    return metrics.get_meter(name, version or __version__)
