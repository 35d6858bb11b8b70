"""
Core module.

Exports:
- EventBus, Event: Event system
- ConfigEvent, ProtectionEvent: Built-in event types
"""

from corelib.core.events import EventBus, Event, ConfigEvent, ProtectionEvent

__all__ = [
    "EventBus",
    "Event",
    "ConfigEvent",
    "ProtectionEvent",
]
