"""Common exceptions for deemodel.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All errors are DeeModelError
    instances carrying an ErrorCode:

    - configuration errors (CONFIG_*) are raised synchronously while
      constructing an accessor, before any bus traffic
    - transport errors (CONNECTION_*) wrap whatever the bus raised
    - STALE_SNAPSHOT signals a seqnum mismatch
"""

from deemodel.common.exceptions import (
    DeeModelError,
    ErrorCode,
    configuration_error,
    transport_error,
    stale_snapshot_error,
)

__all__ = [
    "DeeModelError",
    "ErrorCode",
    "configuration_error",
    "transport_error",
    "stale_snapshot_error",
]
