"""Inventory state: the item list, household profile and alert threshold owned by the caller."""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.utilities.constants import APP_NAME, DEFAULT_ALERT_MONTHS, SNAPSHOT_VERSION


@dataclass(frozen=True)
class InventoryState:
    items: Tuple[StockItem, ...] = ()
    family: HouseholdProfile = field(default_factory=HouseholdProfile)
    alert_months: int = DEFAULT_ALERT_MONTHS

    def merged(self, partial: Dict[str, Any]) -> "InventoryState":
        '''Applies the present top-level fields of an import; absent ones keep the current value.'''
        changes = {}
        if 'items' in partial:
            changes['items'] = tuple(partial['items'])
        if 'family' in partial:
            changes['family'] = partial['family']
        if 'alert_months' in partial:
            changes['alert_months'] = partial['alert_months']
        return replace(self, **changes)

    def to_snapshot(self) -> Dict[str, Any]:
        '''Full export shape: meta, items, family, alertMonths.'''
        return {
            'meta': {'app': APP_NAME, 'ver': SNAPSHOT_VERSION},
            'items': [item.to_dict() for item in self.items],
            'family': self.family.to_dict(),
            'alertMonths': self.alert_months,
        }
