"""Geofence package - permission tracking and exit detection.

- permission: PermissionGate, the location authorization state
- monitor: GeofenceMonitor, the single-region exit state machine
- channel: SignalChannel, hands platform signals to the coordination context
"""

from .channel import SignalChannel
from .monitor import GeofenceMonitor
from .permission import PermissionGate

__all__ = ["GeofenceMonitor", "PermissionGate", "SignalChannel"]
