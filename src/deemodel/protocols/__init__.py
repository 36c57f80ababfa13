"""Protocol definitions for deemodel.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping (duck typing with type hints).
"""

from .bus import BusProtocol, RemoteObjectProtocol

__all__ = [
    "BusProtocol",
    "RemoteObjectProtocol",
]
