"""Expiration classification for stock items.

States, tested in order (first match wins):
  expired   -> expiry <  today
  due_today -> expiry == today
  due_soon  -> expiry <= warn edge (today + alert months)
  ok        -> expiry >  warn edge
Items without a parsable expiry are 'untracked'.

All comparisons are on calendar dates; the time of day of `now` is dropped.
"""
from __future__ import annotations
import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional, Union

from rollingstock.domain.StockItem import StockItem
from rollingstock.utilities.config import ROLLING_WINDOW_DAYS
from rollingstock.utilities.constants import DEFAULT_ALERT_MONTHS

__all__ = [
    "ExpiryState", "ExpiryAlerts", "add_months", "to_today", "warn_edge",
    "classify_expiration", "days_until", "is_rolling_candidate", "compute_expiry_alerts",
]

Instant = Union[date, datetime, None]


class ExpiryState(str, Enum):
    EXPIRED = "expired"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    OK = "ok"
    UNTRACKED = "untracked"


def add_months(day: date, months: int) -> date:
    """Calendar month add; the day is clamped to the end of the target month.

    Jan 31 + 1 month -> Feb 28 (29 in leap years), Jan 31 + 2 months -> Mar 31.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def to_today(now: Instant = None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def warn_edge(now: Instant = None, alert_months: int = DEFAULT_ALERT_MONTHS) -> date:
    return add_months(to_today(now), alert_months)


def classify_expiration(item: StockItem, now: Instant = None,
                        alert_months: int = DEFAULT_ALERT_MONTHS) -> ExpiryState:
    expiry = item.expiry_date
    if expiry is None:
        return ExpiryState.UNTRACKED
    today = to_today(now)
    if expiry < today:
        return ExpiryState.EXPIRED
    if expiry == today:
        return ExpiryState.DUE_TODAY
    if expiry <= add_months(today, alert_months):
        return ExpiryState.DUE_SOON
    return ExpiryState.OK


def days_until(item: StockItem, now: Instant = None) -> Optional[int]:
    expiry = item.expiry_date
    if expiry is None:
        return None
    return (expiry - to_today(now)).days


def is_rolling_candidate(item: StockItem, now: Instant = None,
                         window: int = ROLLING_WINDOW_DAYS) -> bool:
    """Expires within [0, window] days: use it up and replace it."""
    days_left = days_until(item, now)
    return days_left is not None and 0 <= days_left <= window


@dataclass(frozen=True)
class ExpiryAlerts:
    expired: List[StockItem] = field(default_factory=list)
    near: List[StockItem] = field(default_factory=list)
    rolling: List[StockItem] = field(default_factory=list)
    alert_months: int = DEFAULT_ALERT_MONTHS

    def to_dict(self):
        return {
            'alertMonths': self.alert_months,
            'expired': [it.to_dict() for it in self.expired],
            'near': [it.to_dict() for it in self.near],
            'rolling': [it.to_dict() for it in self.rolling],
        }


def compute_expiry_alerts(items: Iterable[StockItem], now: Instant = None,
                          alert_months: int = DEFAULT_ALERT_MONTHS,
                          window: int = ROLLING_WINDOW_DAYS) -> ExpiryAlerts:
    """Split the stock into expired, near (due today or soon) and rolling candidates.

    Rolling candidates are independent of the state badge and sorted by expiry.
    """
    today = to_today(now)
    expired: List[StockItem] = []
    near: List[StockItem] = []
    rolling: List[StockItem] = []
    for item in items:
        state = classify_expiration(item, today, alert_months)
        if state == ExpiryState.UNTRACKED:
            continue
        if state == ExpiryState.EXPIRED:
            expired.append(item)
        elif state in (ExpiryState.DUE_TODAY, ExpiryState.DUE_SOON):
            near.append(item)
        if is_rolling_candidate(item, today, window):
            rolling.append(item)
    rolling.sort(key=lambda it: it.expiry_date)
    return ExpiryAlerts(expired=expired, near=near, rolling=rolling, alert_months=alert_months)
