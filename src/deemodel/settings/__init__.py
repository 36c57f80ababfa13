"""Settings for deemodel, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment variables (``DEEMODEL_`` prefix)
    2. ``.env`` file in the working directory
    3. Default values in code

Quick Start:
    >>> from deemodel.settings import get_settings
    >>> settings = get_settings()
    >>> settings.clone_timeout_seconds
"""

from .main import DeeModelSettings, get_settings

__all__ = [
    "DeeModelSettings",
    "get_settings",
]
