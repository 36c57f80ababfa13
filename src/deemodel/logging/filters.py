"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every line logged while a model is being fetched names that model.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from deemodel.__version__ import __version__

service_name_var: ContextVar[Optional[str]] = ContextVar("service_name", default=None)
object_path_var: ContextVar[Optional[str]] = ContextVar("object_path", default=None)


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Context variables are task-local under asyncio, so overlapping
    fetches of different models keep their own values.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "service_name", service_name_var.get())
        setattr(record, "object_path", object_path_var.get())
        setattr(record, "sdk_name", "deemodel")
        setattr(record, "sdk_version", __version__)

        return True


@contextmanager
def model_context(service_name: str, object_path: str) -> Iterator[None]:
    """Bind the model being accessed to log records for the enclosed block."""
    service_token = service_name_var.set(service_name)
    path_token = object_path_var.set(object_path)
    try:
        yield
    finally:
        service_name_var.reset(service_token)
        object_path_var.reset(path_token)
