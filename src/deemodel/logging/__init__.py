"""Logging infrastructure for deemodel.

This module provides structured logging with JSON output, context tracking
and OpenTelemetry trace correlation.
"""

from deemodel.logging.filters import ContextFilter, model_context
from deemodel.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "model_context",
    "CustomJsonFormatter",
    "ContextFilter",
]
