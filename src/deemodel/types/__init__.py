"""Type definitions for deemodel."""

from .base import DeeBaseModel
from .model import (
    ModelSchema,
    ModelSnapshot,
    RawRow,
    RawSnapshot,
    Record,
    Value,
)

__all__ = [
    'DeeBaseModel',
    'ModelSchema',
    'ModelSnapshot',
    'RawRow',
    'RawSnapshot',
    'Record',
    'Value',
]
