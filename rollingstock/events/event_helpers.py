"""Event helper utilities.

Publishes expiry alerts for an evaluated inventory on the global event bus.

Quick import:
    from rollingstock.events.event_helpers import publish_expiry_alerts
"""
from __future__ import annotations
from typing import Any

from rollingstock.logic.expiry.classifier import ExpiryAlerts, days_until
from .Event_Bus import (
    publish,
    INVENTORY_EXPIRED, INVENTORY_DUE_SOON, INVENTORY_EXPIRY_SNAPSHOT,
)

__all__ = [
    'publish_expired', 'publish_due_soon', 'publish_expiry_snapshot', 'publish_expiry_alerts',
]


def publish_expired(item: Any, days_left: int):
    """Publish an inventory.expired event."""
    publish(INVENTORY_EXPIRED, {
        'item': item,
        'days_left': days_left,
    })


def publish_due_soon(item: Any, days_left: int, alert_months: int):
    """Publish an inventory.due_soon event."""
    publish(INVENTORY_DUE_SOON, {
        'item': item,
        'days_left': days_left,
        'alert_months': alert_months,
    })


def publish_expiry_snapshot(alerts: ExpiryAlerts):
    """Publish the counts of one evaluation.

    Payload structure:
        {'expired': <int>, 'near': <int>, 'rolling': <int>, 'alert_months': <int>}
    """
    publish(INVENTORY_EXPIRY_SNAPSHOT, {
        'expired': len(alerts.expired),
        'near': len(alerts.near),
        'rolling': len(alerts.rolling),
        'alert_months': alerts.alert_months,
    })


def publish_expiry_alerts(alerts: ExpiryAlerts, now=None):
    """Publish one event per expired / near item, then the snapshot."""
    for item in alerts.expired:
        publish_expired(item, days_until(item, now))
    for item in alerts.near:
        publish_due_soon(item, days_until(item, now), alerts.alert_months)
    publish_expiry_snapshot(alerts)
