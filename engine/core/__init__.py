"""
Core engine module.

Exports:
- EventBus, Event, StorageEvent: Event system
- setup_logging: Process-wide diagnostic log
"""

from engine.core.events import EventBus, Event, StorageEvent
from engine.core.log import setup_logging

__all__ = [
    # Events
    "EventBus",
    "Event",
    "StorageEvent",
    # Logging
    "setup_logging",
]
