"""
Core utilities and modules.

Public API:
    - EventBus: Synchronous publish/subscribe registry

Usage:
    from core.event_bus import EventBus

    bus = EventBus()
    bus.subscribe("change", on_change)
"""

from core.event_bus import EventBus

__all__ = [
    "EventBus",
]
