from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deemodel.constants import BusType


class DeeModelSettings(BaseSettings):
    """Runtime configuration for deemodel.

    Values are read from ``DEEMODEL_``-prefixed environment variables or a
    ``.env`` file. The object root and interface name of the Dee protocol
    are fixed and therefore live in ``deemodel.constants``, not here.

    Example:
        ```bash
        export DEEMODEL_BUS_TYPE=session
        export DEEMODEL_CLONE_TIMEOUT_SECONDS=5
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="DEEMODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bus_type: BusType = Field(
        default=BusType.SESSION,
        description="Bus opened by connect_bus() when no bus type is passed explicitly"
    )
    clone_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        le=600.0,
        description="Upper bound for a single Clone call. None leaves timing to the bus library"
    )
    log_level: str = Field(
        default="INFO",
        description="Level passed to setup_logging() by applications that use it"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a standard logging level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(
                f"Unknown log level: {v}. Use DEBUG, INFO, WARNING, ERROR or CRITICAL"
            )
        return level


_settings: Optional[DeeModelSettings] = None


def get_settings(force_reload: bool = False) -> DeeModelSettings:
    """Get the settings singleton.

    Args:
        force_reload: Re-read the environment even if settings were loaded

    Returns:
        DeeModelSettings: The shared settings instance

    Example:
        ```python
        settings = get_settings()
        assert get_settings() is settings

        new_settings = get_settings(force_reload=True)
        assert new_settings is not settings
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = DeeModelSettings()

    return _settings
