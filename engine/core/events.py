"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings.

Usage:
    # Subscribe
    event_bus.subscribe(StorageEvent.CARD_REMOVED, on_card_removed)

    # Publish
    event_bus.publish(StorageEvent.CARD_REMOVED, slot="A")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class StorageEvent(Enum):
    """Storage backend events."""
    CARD_MOUNTED = auto()
    CARD_REMOVED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    handler: EventHandler
    priority: int
    one_shot: bool


class EventBus:
    """
    Publish/subscribe messaging between the save subsystem and its callers.

    Features:
    - Typed events (Enum-based)
    - Priority ordering (higher first, ties in subscription order)
    - One-shot handlers
    - Event consumption (stops propagation)

    A failing handler is logged and skipped; it never breaks the publisher.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
        """
        subscriptions = self._subscriptions.setdefault(event_type, [])
        index = len(subscriptions)
        for i, existing in enumerate(subscriptions):
            if priority > existing.priority:
                index = i
                break
        subscriptions.insert(index, _Subscription(handler, priority, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            self._subscriptions[event_type] = [
                s for s in subscriptions if s.handler != handler
            ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event to every handler subscribed to its type.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return event

        for subscription in list(subscriptions):
            if subscription.one_shot:
                subscriptions.remove(subscription)
            try:
                subscription.handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event_type}")
            if event.consumed:
                break

        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all handlers."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)
