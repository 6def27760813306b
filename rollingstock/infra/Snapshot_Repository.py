"""Snapshot repository: key-value JSON file persistence for items, household and alert threshold.

Every value read back goes through the record validators, so a hand-edited
or corrupted file can never put unvalidated records into the engine.
Writes are atomic and serialized; the last write wins.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.Snapshot import InventoryState
from rollingstock.domain.StockItem import StockItem
from rollingstock.infra.paths import SNAPSHOT_FILE
from rollingstock.utilities.constants import DEFAULT_ALERT_MONTHS, DEFAULT_FAMILY
from rollingstock.utilities.validators import (
    validate_alert_months,
    validate_family,
    validate_items,
)

logger = logging.getLogger(__name__)

ITEMS_KEY = 'rsp_items'
FAMILY_KEY = 'rsp_family'
ALERT_MONTHS_KEY = 'rsp_alert_months'

_write_lock = Lock()


class SnapshotRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else SNAPSHOT_FILE

    # --- raw store ----------------------------------------------------------
    def _read_store(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                store = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read snapshot store %s: %s", self.path, e)
            return {}
        if not isinstance(store, dict):
            logger.error("Snapshot store %s is not a JSON object; using defaults", self.path)
            return {}
        return store

    def _write_store(self, store: Dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".rollingstock_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def _update(self, **values):
        with _write_lock:
            store = self._read_store()
            store.update(values)
            self._write_store(store)

    # --- typed access ---------------------------------------------------------
    def load_items(self) -> List[StockItem]:
        return validate_items(self._read_store().get(ITEMS_KEY, []))

    def save_items(self, items: List[StockItem]):
        self._update(**{ITEMS_KEY: [item.to_dict() for item in items]})

    def load_family(self) -> HouseholdProfile:
        stored = self._read_store().get(FAMILY_KEY)
        return validate_family(stored if stored is not None else DEFAULT_FAMILY)

    def save_family(self, family: HouseholdProfile):
        self._update(**{FAMILY_KEY: family.to_dict()})

    def load_alert_months(self) -> int:
        return validate_alert_months(self._read_store().get(ALERT_MONTHS_KEY, DEFAULT_ALERT_MONTHS))

    def save_alert_months(self, months: int):
        self._update(**{ALERT_MONTHS_KEY: months})

    def load_state(self) -> InventoryState:
        store = self._read_store()
        family = store.get(FAMILY_KEY)
        return InventoryState(
            items=tuple(validate_items(store.get(ITEMS_KEY, []))),
            family=validate_family(family if family is not None else DEFAULT_FAMILY),
            alert_months=validate_alert_months(store.get(ALERT_MONTHS_KEY, DEFAULT_ALERT_MONTHS)),
        )

    def replace_state(self, state: InventoryState):
        self._update(**{
            ITEMS_KEY: [item.to_dict() for item in state.items],
            FAMILY_KEY: state.family.to_dict(),
            ALERT_MONTHS_KEY: state.alert_months,
        })

    # --- item edits -------------------------------------------------------------
    def add_item(self, item: StockItem) -> List[StockItem]:
        items = self.load_items() + [item]
        self.save_items(items)
        return items

    def replace_item(self, index: int, item: StockItem) -> List[StockItem]:
        '''Replaces the item at index; raises IndexError if there is none.'''
        items = self.load_items()
        if not 0 <= index < len(items):
            raise IndexError(f"No item at index {index}")
        items[index] = item
        self.save_items(items)
        return items

    def delete_item(self, index: int) -> StockItem:
        '''Removes and returns the item at index; raises IndexError if there is none.'''
        items = self.load_items()
        if not 0 <= index < len(items):
            raise IndexError(f"No item at index {index}")
        removed = items.pop(index)
        self.save_items(items)
        return removed

    def clear_items(self):
        self.save_items([])
