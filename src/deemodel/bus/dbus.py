"""D-Bus transport backed by dbus-fast.

Calls are sent as raw METHOD_CALL messages so binding an object needs no
introspection round trip.
"""

from typing import Any, Optional, Tuple, Union

from dbus_fast import BusType as DBusBusType
from dbus_fast import Message, MessageType, Variant
from dbus_fast.aio import MessageBus
from dbus_fast.errors import DBusError

from deemodel.common.exceptions import transport_error
from deemodel.constants import BusType
from deemodel.logging import get_logger
from deemodel.settings import get_settings

logger = get_logger(__name__)

_NO_REPLY_ERROR = "org.freedesktop.DBus.Error.NoReply"


def unwrap_variants(value: Any) -> Any:
    """Replace every Variant in a reply value by the value it carries."""
    if isinstance(value, Variant):
        return unwrap_variants(value.value)
    if isinstance(value, (list, tuple)):
        return [unwrap_variants(item) for item in value]
    if isinstance(value, dict):
        return {key: unwrap_variants(item) for key, item in value.items()}
    return value


class DBusObject:
    """Handle for one interface of a remote object, see RemoteObjectProtocol."""

    def __init__(self, message_bus: MessageBus, service_name: str, object_path: str, interface: str):
        self.message_bus = message_bus
        self.service_name = service_name
        self.object_path = object_path
        self.interface = interface

    async def call(self, method: str, *args: Any, signature: str = "") -> Tuple[Any, ...]:
        """Invoke ``method`` and return the unwrapped reply body.

        Args:
            method: Member name
            *args: Method arguments
            signature: D-Bus signature of ``args``

        Raises:
            DBusError: If the remote side answered with an error or not at all
        """
        reply = await self.message_bus.call(
            Message(
                destination=self.service_name,
                path=self.object_path,
                interface=self.interface,
                member=method,
                signature=signature,
                body=list(args),
            )
        )
        if reply is None:
            raise DBusError(_NO_REPLY_ERROR, f"No reply to {self.interface}.{method}")
        if reply.message_type == MessageType.ERROR:
            text = reply.body[0] if reply.body and isinstance(reply.body[0], str) else ""
            raise DBusError(reply.error_name, text)
        return tuple(unwrap_variants(item) for item in reply.body)


class DBusBus:
    """Adapter exposing a dbus-fast MessageBus as a BusProtocol."""

    def __init__(self, message_bus: MessageBus):
        self.message_bus = message_bus

    def get_object(self, service_name: str, object_path: str, interface: str) -> DBusObject:
        return DBusObject(self.message_bus, service_name, object_path, interface)

    async def disconnect(self) -> None:
        self.message_bus.disconnect()
        await self.message_bus.wait_for_disconnect()


async def connect_bus(bus_type: Optional[Union[BusType, str]] = None) -> DBusBus:
    """Open a connection to the session or system bus.

    Args:
        bus_type: Which bus to connect to. Defaults to the ``bus_type`` setting.

    Raises:
        DeeModelError: CONNECTION_ERROR if the bus cannot be reached
    """
    bus_type = BusType(bus_type or get_settings().bus_type)
    dbus_type = DBusBusType.SYSTEM if bus_type is BusType.SYSTEM else DBusBusType.SESSION

    try:
        message_bus = await MessageBus(bus_type=dbus_type).connect()
    except Exception as e:
        raise transport_error(f"Failed to connect to the {bus_type.value} bus", cause=e) from e

    logger.info("Connected to the %s bus as %s", bus_type.value, message_bus.unique_name)
    return DBusBus(message_bus)
