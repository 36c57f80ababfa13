"""Bus protocol definitions.

The accessor talks to the bus only through these two interfaces, so any
bus library (or a test double returning canned replies) can be plugged in.
"""

from typing import Any, Awaitable, Protocol, Tuple, runtime_checkable


@runtime_checkable
class RemoteObjectProtocol(Protocol):
    """A local handle for one interface of one remote object."""

    def call(self, method: str, *args: Any) -> Awaitable[Tuple[Any, ...]]:
        """Invoke a method on the remote object.

        Args:
            method: Method (member) name, e.g. ``"Clone"``
            *args: Positional method arguments

        Returns:
            Awaitable resolving to the reply body as a tuple, with any
            variant wrappers already unwrapped

        Raises:
            Exception: Whatever the bus library raises for a failed call
        """
        ...


@runtime_checkable
class BusProtocol(Protocol):
    """A connected message bus able to hand out remote object handles."""

    def get_object(
        self,
        service_name: str,
        object_path: str,
        interface: str,
    ) -> RemoteObjectProtocol:
        """Bind a handle to a remote object.

        Binding must be local bookkeeping only; no message is sent until
        the handle's ``call`` is awaited.

        Args:
            service_name: Well-known bus name owning the object
            object_path: Object path on that service
            interface: Interface the handle's calls are addressed to

        Returns:
            A handle implementing RemoteObjectProtocol
        """
        ...
