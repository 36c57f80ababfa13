"""Constants module for deemodel.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other deemodel modules.
"""

from deemodel.constants.model import (
    BusType,
    CLONE_METHOD,
    CLONE_REPLY_LENGTH,
    MODEL_INTERFACE,
    MODEL_OBJECT_ROOT,
)

__all__ = [
    "BusType",
    "CLONE_METHOD",
    "CLONE_REPLY_LENGTH",
    "MODEL_INTERFACE",
    "MODEL_OBJECT_ROOT",
]
