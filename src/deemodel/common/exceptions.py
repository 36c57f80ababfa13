from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for deemodel operations.

    Errors are categorised by code rather than by a tree of exception
    classes. Each category has its own prefix.

    Attributes:
        CONFIG_*: Construction and configuration errors
        CONNECTION_*: Bus transport errors
        DATA_*: Snapshot consistency errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_MISSING = "CONFIG_002"
    CONFIG_INVALID = "CONFIG_003"

    # Transport errors
    CONNECTION_ERROR = "CONNECTION_001"
    TIMEOUT_ERROR = "CONNECTION_002"
    INVALID_REPLY = "CONNECTION_003"

    # Data errors
    STALE_SNAPSHOT = "DATA_001"


_TRANSPORT_CODES = frozenset({
    ErrorCode.CONNECTION_ERROR,
    ErrorCode.TIMEOUT_ERROR,
    ErrorCode.INVALID_REPLY,
})

_CONFIGURATION_CODES = frozenset({
    ErrorCode.CONFIG_ERROR,
    ErrorCode.CONFIG_MISSING,
    ErrorCode.CONFIG_INVALID,
})


class DeeModelError(Exception):
    """Base exception for all deemodel errors.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        """Initialize deemodel error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
            cause: Optional underlying exception
            is_retryable: Whether error is transient
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency
        from deemodel.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
                "is_retryable": is_retryable,
            },
            exc_info=cause,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    @property
    def is_configuration_error(self) -> bool:
        return self.error_code in _CONFIGURATION_CODES

    @property
    def is_transport_error(self) -> bool:
        return self.error_code in _TRANSPORT_CODES

    @property
    def is_stale_snapshot(self) -> bool:
        return self.error_code is ErrorCode.STALE_SNAPSHOT

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }


def configuration_error(
    message: str,
    parameter: Optional[str] = None,
    missing: bool = False,
    **kwargs
) -> DeeModelError:
    """Create a configuration error.

    Args:
        message: Error message
        parameter: Construction parameter that caused the error
        missing: True when the parameter was not supplied at all
        **kwargs: Additional error details

    Returns:
        DeeModelError with CONFIG_MISSING or CONFIG_INVALID code
    """
    details = kwargs.pop("details", None) or {}
    if parameter:
        details["parameter"] = parameter

    return DeeModelError(
        message=message,
        error_code=ErrorCode.CONFIG_MISSING if missing else ErrorCode.CONFIG_INVALID,
        details=details,
        **kwargs
    )


def transport_error(
    message: str,
    service_name: Optional[str] = None,
    object_path: Optional[str] = None,
    error_code: ErrorCode = ErrorCode.CONNECTION_ERROR,
    **kwargs
) -> DeeModelError:
    """Create a transport error for a failed remote call.

    Args:
        message: Error message
        service_name: Bus name the call was addressed to
        object_path: Object path the call was addressed to
        error_code: One of the CONNECTION_* codes
        **kwargs: Additional arguments for DeeModelError (cause, details)

    Returns:
        DeeModelError with a transport error code. Timeouts are retryable.
    """
    details = kwargs.pop("details", None) or {}
    if service_name:
        details["service_name"] = service_name
    if object_path:
        details["object_path"] = object_path

    kwargs.setdefault("is_retryable", error_code is ErrorCode.TIMEOUT_ERROR)

    return DeeModelError(
        message=message,
        error_code=error_code,
        details=details,
        **kwargs
    )


def stale_snapshot_error(
    expected_seqnum: int,
    actual_seqnum: int,
    **kwargs
) -> DeeModelError:
    """Create the error raised when a snapshot's seqnum is not the expected one.

    Args:
        expected_seqnum: Seqnum requested by the caller
        actual_seqnum: Seqnum the snapshot was taken at
        **kwargs: Additional error details

    Returns:
        DeeModelError with STALE_SNAPSHOT code
    """
    details = kwargs.pop("details", None) or {}
    details["expected_seqnum"] = expected_seqnum
    details["actual_seqnum"] = actual_seqnum

    return DeeModelError(
        message="This seqnum is not expected.",
        error_code=ErrorCode.STALE_SNAPSHOT,
        details=details,
        **kwargs
    )
