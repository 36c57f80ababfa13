"""Utility functions and helpers for deemodel."""

from deemodel.utils.decorators import traced

__all__ = [
    "traced",
]
