"""
Event Bus

Synchronous publish/subscribe used by the GPIO manager to announce
lifecycle and value-change events.

Subscribers are kept per event type and invoked in registration order,
on whichever thread calls publish().
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable, List


class EventBus:
    """
    Registry of subscriber lists keyed by event type.

    Usage:
        bus = EventBus()
        bus.subscribe("export", lambda channel: print(channel))
        bus.publish("export", 7)
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.subscribers: Dict[Hashable, List[Callable[..., Any]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: Hashable, callback: Callable[..., Any]) -> None:
        """Register a handler for an event type"""
        if not callable(callback):
            raise TypeError(f"Subscriber for {event_type} must be callable")

        with self._lock:
            self.subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: Hashable, callback: Callable[..., Any]) -> bool:
        """
        Remove a handler.

        Returns:
            True if the handler was registered, False otherwise
        """
        with self._lock:
            callbacks = self.subscribers.get(event_type, [])
            if callback not in callbacks:
                return False
            callbacks.remove(callback)
            return True

    def publish(self, event_type: Hashable, *data: Any) -> int:
        """
        Deliver an event to every subscriber of its type.

        A failing subscriber is logged and does not stop delivery to the
        ones registered after it.

        Returns:
            Number of subscribers invoked
        """
        # Snapshot so handlers may (un)subscribe while being notified
        with self._lock:
            callbacks = list(self.subscribers.get(event_type, []))

        for callback in callbacks:
            try:
                callback(*data)
            except Exception as e:
                self.logger.error(
                    f"Error in {event_type} subscriber: {e}",
                    exc_info=True,
                )

        return len(callbacks)

    def subscriber_count(self, event_type: Hashable) -> int:
        """Number of handlers registered for an event type"""
        with self._lock:
            return len(self.subscribers.get(event_type, []))

    def clear(self) -> None:
        """Drop every subscriber of every event type"""
        with self._lock:
            self.subscribers.clear()
