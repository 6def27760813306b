"""StockItem domain entity: one supply entry with optional expiry and calorie value."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
import logging

from rollingstock.utilities.constants import DATE_FORMAT, DEFAULT_CATEGORY, MAX_AMOUNT, WATER_UNITS

logger = logging.getLogger(__name__)


def parse_expiry(value: Optional[str]) -> Optional[date]:
    '''Parses an ISO calendar date (YYYY-MM-DD). Empty or unparsable values mean "no expiry".'''
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        logger.warning("Unparsable expiry date %r treated as untracked", value)
        return None


def _plain_number(value: float):
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class StockItem:
    name: str
    category: str = DEFAULT_CATEGORY
    quantity: float = 0.0
    unit: str = ""
    expiry: str = ""
    kcal: Optional[float] = None
    created_at: int = 0

    @property
    def is_water(self) -> bool:
        '''Water is derived: category "water" or a liter unit, compared case-insensitively.'''
        return self.category == "water" or (self.unit or "").lower() in WATER_UNITS

    @property
    def expiry_date(self) -> Optional[date]:
        return parse_expiry(self.expiry)

    @property
    def total_kcal(self) -> Optional[float]:
        '''Energy of the whole entry; None when the item carries no calorie value.'''
        if self.kcal is None:
            return None
        return min(self.kcal * self.quantity, MAX_AMOUNT)

    def __str__(self) -> str:
        parts = [f"{self.name} - {_plain_number(self.quantity)} {self.unit}".rstrip()]
        if self.expiry:
            parts.append(f"Exp: {self.expiry}")
        parts.append(f"[{self.category}]")
        return " - ".join(parts)

    def to_dict(self):
        '''Converts the StockItem to the persisted snapshot shape.'''
        return {
            "name": self.name,
            "category": self.category,
            "quantity": _plain_number(self.quantity),
            "unit": self.unit,
            "expiry": self.expiry,
            "kcal": _plain_number(self.kcal) if self.kcal is not None else None,
            "createdAt": self.created_at,
        }
