
from deemodel.__version__ import __version__
from deemodel.model import DeeModel, create, model_object_path
from deemodel.bus import DBusBus, connect_bus
from deemodel.common.exceptions import DeeModelError, ErrorCode
from deemodel.types import ModelSchema, ModelSnapshot, RawSnapshot, Record, Value
from deemodel.logging import setup_logging
from deemodel.settings import get_settings


__all__ = [
    "__version__",

    "DeeModel",
    "create",
    "model_object_path",

    # Transport
    "DBusBus",
    "connect_bus",

    # Exceptions (public API)
    "DeeModelError",
    "ErrorCode",

    # Types
    "ModelSchema",
    "ModelSnapshot",
    "RawSnapshot",
    "Record",
    "Value",

    "setup_logging",
    "get_settings",
]
