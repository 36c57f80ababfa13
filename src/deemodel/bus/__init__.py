"""Bus transports implementing deemodel.protocols.BusProtocol."""

from deemodel.bus.dbus import DBusBus, DBusObject, connect_bus, unwrap_variants

__all__ = [
    "DBusBus",
    "DBusObject",
    "connect_bus",
    "unwrap_variants",
]
