"""Simple Event Bus / Observer implementation for inventory alerts.

Event names:
  inventory.expired -> payload {"item": StockItem, "days_left": int}
  inventory.due_soon -> payload {"item": StockItem, "days_left": int, "alert_months": int}
  inventory.expiry_snapshot -> payload {"expired": int, "near": int, "rolling": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
INVENTORY_EXPIRED = "inventory.expired"
INVENTORY_DUE_SOON = "inventory.due_soon"
INVENTORY_EXPIRY_SNAPSHOT = "inventory.expiry_snapshot"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                # one broken subscriber must not stop delivery to the others
                logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
    'INVENTORY_EXPIRED', 'INVENTORY_DUE_SOON', 'INVENTORY_EXPIRY_SNAPSHOT'
]
