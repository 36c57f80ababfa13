import asyncio
import time
from typing import Dict, Optional

from opentelemetry.trace import SpanKind

from deemodel.common.exceptions import DeeModelError, ErrorCode, transport_error
from deemodel.constants import CLONE_METHOD
from deemodel.logging import get_logger
from deemodel.monitoring import ModelMetrics, get_metrics
from deemodel.protocols import RemoteObjectProtocol
from deemodel.types import RawSnapshot
from deemodel.utils.decorators import traced

logger = get_logger(__name__)


def _clone_span_attributes(proxy, *, service_name=None, object_path=None, **_) -> Dict[str, str]:
    return {
        "rpc.system": "dbus",
        "rpc.service": service_name,
        "rpc.method": CLONE_METHOD,
        "deemodel.object_path": object_path,
    }


@traced(
    span_name="deemodel.clone",
    kind=SpanKind.CLIENT,
    attribute_getter=_clone_span_attributes,
)
async def fetch_snapshot(
    proxy: RemoteObjectProtocol,
    *,
    timeout: Optional[float] = None,
    service_name: Optional[str] = None,
    object_path: Optional[str] = None,
    metrics: Optional[ModelMetrics] = None,
) -> RawSnapshot:
    """Call ``Clone`` on a bound model object and parse the reply.

    This is the only place the accessor sends anything over the bus.
    Cancelling the awaiting task cancels the in-flight call.

    Args:
        proxy: Handle bound to the model object
        timeout: Optional upper bound in seconds for the call
        service_name: Bus name of the model, for errors and telemetry
        object_path: Object path of the model, for errors and telemetry
        metrics: Collector to record the call in; defaults to the shared one

    Returns:
        RawSnapshot: The parsed reply

    Raises:
        DeeModelError: TIMEOUT_ERROR if the call took longer than ``timeout``,
            CONNECTION_ERROR if the call failed, INVALID_REPLY if the reply
            does not have the Clone reply shape. The bus library's exception
            is attached as the cause.
    """
    metrics = metrics or get_metrics()
    labels = {"service_name": service_name or ""}
    start_time = time.perf_counter()

    try:
        if timeout is None:
            reply = await proxy.call(CLONE_METHOD)
        else:
            reply = await asyncio.wait_for(proxy.call(CLONE_METHOD), timeout)
    except asyncio.TimeoutError as e:
        metrics.record_clone(time.perf_counter() - start_time, False, labels)
        if timeout is None:
            # raised by the transport itself, not by wait_for
            raise transport_error(
                f"Clone call failed: {e}",
                service_name=service_name,
                object_path=object_path,
                error_code=ErrorCode.TIMEOUT_ERROR,
                cause=e,
            ) from e
        raise transport_error(
            f"Clone call timed out after {timeout} seconds",
            service_name=service_name,
            object_path=object_path,
            error_code=ErrorCode.TIMEOUT_ERROR,
            cause=e,
        ) from e
    except DeeModelError:
        metrics.record_clone(time.perf_counter() - start_time, False, labels)
        raise
    except Exception as e:
        metrics.record_clone(time.perf_counter() - start_time, False, labels)
        raise transport_error(
            f"Clone call failed: {e}",
            service_name=service_name,
            object_path=object_path,
            cause=e,
        ) from e

    metrics.record_clone(time.perf_counter() - start_time, True, labels)

    try:
        snapshot = RawSnapshot.from_reply(reply)
    except (TypeError, ValueError) as e:
        raise transport_error(
            "Clone reply is malformed",
            service_name=service_name,
            object_path=object_path,
            error_code=ErrorCode.INVALID_REPLY,
            cause=e,
        ) from e

    logger.debug(
        "Fetched snapshot of %s at seqnum %d (%d rows, %d columns)",
        snapshot.swarm_name, snapshot.seqnum_after, len(snapshot.rows), snapshot.field_count,
    )
    return snapshot
