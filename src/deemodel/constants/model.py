"""Dee model protocol constants and enumerations.

This module contains the fixed names of the Dee model D-Bus protocol and
the enum types used for bus configuration.
"""

from enum import Enum


MODEL_OBJECT_ROOT = "/com/canonical/dee/model"
MODEL_INTERFACE = "com.canonical.Dee.Model"
CLONE_METHOD = "Clone"

# Number of members in a Clone reply: swarm name, column types, rows,
# positions, change types and the (before, after) seqnum pair.
CLONE_REPLY_LENGTH = 6


class BusType(str, Enum):
    """Message bus a model lives on.
    
    Values:
        SESSION: Per-login session bus (where Unity lenses publish models)
        SYSTEM: System-wide bus
    """
    
    SESSION = "session"
    SYSTEM = "system"
