"""Web-facing observers for inventory events.

This module subscribes to the GLOBAL_EVENT_BUS for:
  - inventory.expired
  - inventory.due_soon

and stores a lightweight in-memory ring buffer of recent events that the
web layer can serve to clients that poll for alerts.

Design:
  * Each event is stored with an auto-increment integer id (cursor) so
    clients can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; it is per-process state.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone
import logging

from .Event_Bus import (
    GLOBAL_EVENT_BUS, INVENTORY_EXPIRED, INVENTORY_DUE_SOON
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None and hasattr(item, 'name'):
                evt['name'] = item.name
                evt['unit'] = item.unit
                evt['quantity'] = item.quantity
                evt['expiry'] = item.expiry
            for k in ('days_left', 'alert_months'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(INVENTORY_EXPIRED, _record)
    GLOBAL_EVENT_BUS.subscribe(INVENTORY_DUE_SOON, _record)
    _started = True
    logger.info("Web observers for inventory events started")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns all buffered events.
    next_cursor is the largest id so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
