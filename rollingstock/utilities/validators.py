"""
Record validation using Pydantic: the single sanitization boundary.

Every coercer below returns a valid value for any input, so building a
record never fails. Malformed input is resolved to a safe default instead
of being reported to the caller.
"""
import logging
import math
import re
import time
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.utilities.constants import (
    ALLOWED_ALERT_MONTHS,
    ALLOWED_DAYS,
    CATEGORIES,
    DATE_FORMAT,
    DEFAULT_ALERT_MONTHS,
    DEFAULT_CATEGORY,
    DEFAULT_DAYS,
    DEFAULT_FAMILY,
    EXPIRY_MAX_LENGTH,
    MEMBER_MAX,
    MEMBER_MIN,
    NAME_MAX_LENGTH,
    UNIT_MAX_LENGTH,
)

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def _now_ms() -> int:
    return int(time.time() * 1000)


def parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse: 7 -> 7, 3.9 -> 3, '14 days' -> 14, 'abc' -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(1)) if match else None
    return None


def parse_float(value: Any) -> Optional[float]:
    """Leading-number parse returning only finite floats."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if not match:
            return None
        result = float(match.group(1))
    else:
        return None
    return result if math.isfinite(result) else None


def _text(value: Any) -> str:
    """Blank for falsy scalars and empty containers; booleans in lowercase."""
    if isinstance(value, bool):
        return 'true' if value else ''
    if value is None or value == 0 or value == '':
        return ''
    if isinstance(value, (list, tuple, dict)) and not value:
        return ''
    return str(value)


class StockItemRecord(BaseModel):
    """Schema for a stock item record (storage, import, or form submission)."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    name: str = Field('', max_length=NAME_MAX_LENGTH)
    category: str = DEFAULT_CATEGORY
    quantity: float = Field(0.0, ge=0)
    unit: str = Field('', max_length=UNIT_MAX_LENGTH)
    expiry: str = Field('', max_length=EXPIRY_MAX_LENGTH)
    kcal: Optional[float] = Field(None, ge=0)
    created_at: int = Field(default_factory=_now_ms, alias='createdAt')

    @field_validator('name', mode='before')
    @classmethod
    def coerce_name(cls, v):
        """Trim, truncate to the maximum name length, trim the cut end again."""
        return _text(v).strip()[:NAME_MAX_LENGTH].rstrip()

    @field_validator('category', mode='before')
    @classmethod
    def coerce_category(cls, v):
        """Unknown categories fall back to 'other'."""
        return v if isinstance(v, str) and v in CATEGORIES else DEFAULT_CATEGORY

    @field_validator('quantity', mode='before')
    @classmethod
    def coerce_quantity(cls, v):
        """Non-numeric or negative quantities become 0."""
        return max(0.0, parse_float(v) or 0.0)

    @field_validator('unit', mode='before')
    @classmethod
    def coerce_unit(cls, v):
        return _text(v).strip()[:UNIT_MAX_LENGTH].rstrip()

    @field_validator('expiry', mode='before')
    @classmethod
    def coerce_expiry(cls, v):
        """Kept as text; date parsing happens when the expiry is evaluated."""
        if isinstance(v, (date, datetime)):
            v = v.strftime(DATE_FORMAT)
        return _text(v)[:EXPIRY_MAX_LENGTH]

    @field_validator('kcal', mode='before')
    @classmethod
    def coerce_kcal(cls, v):
        """None means the item does not count toward calories."""
        if v is None:
            return None
        return max(0.0, parse_float(v) or 0.0)

    @field_validator('created_at', mode='before')
    @classmethod
    def coerce_created_at(cls, v):
        """Creation time in epoch ms; missing or non-numeric values get the current time."""
        if isinstance(v, str):
            try:
                v = float(v.strip() or 0)
            except ValueError:
                v = None
        number = parse_float(v)
        # 0 after truncation counts as missing
        created = int(number) if number is not None else 0
        return created or _now_ms()

    def to_item(self) -> StockItem:
        return StockItem(
            name=self.name,
            category=self.category,
            quantity=self.quantity,
            unit=self.unit,
            expiry=self.expiry,
            kcal=self.kcal,
            created_at=self.created_at,
        )


class HouseholdRecord(BaseModel):
    """Schema for the household profile; members clamped to [0, 100]."""
    model_config = ConfigDict(extra='ignore')

    adults: int = Field(0, ge=MEMBER_MIN, le=MEMBER_MAX)
    children: int = Field(0, ge=MEMBER_MIN, le=MEMBER_MAX)
    seniors: int = Field(0, ge=MEMBER_MIN, le=MEMBER_MAX)
    dogs: int = Field(0, ge=MEMBER_MIN, le=MEMBER_MAX)
    cats: int = Field(0, ge=MEMBER_MIN, le=MEMBER_MAX)
    days: int = DEFAULT_DAYS

    @field_validator('adults', 'children', 'seniors', 'dogs', 'cats', mode='before')
    @classmethod
    def clamp_members(cls, v):
        return max(MEMBER_MIN, min(MEMBER_MAX, parse_int(v) or 0))

    @field_validator('days', mode='before')
    @classmethod
    def coerce_days(cls, v):
        """Only the fixed planning horizons are accepted; anything else is 7 days."""
        days = parse_int(v)
        return days if days in ALLOWED_DAYS else DEFAULT_DAYS

    def to_profile(self) -> HouseholdProfile:
        return HouseholdProfile(**self.model_dump())


def validate_item(raw: Any) -> Optional[StockItem]:
    """Validate one record; None when it is not an object or its name is empty."""
    if isinstance(raw, StockItem):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        return None
    try:
        record = StockItemRecord.model_validate(dict(raw))
    except ValidationError as e:  # pragma: no cover - coercers keep every field valid
        logger.warning("Dropping stock record that failed validation: %s", e)
        return None
    if not record.name:
        return None
    return record.to_item()


def validate_items(raw: Any) -> List[StockItem]:
    """Sanitize a collection of item records. Non-list input yields an empty list."""
    if not isinstance(raw, (list, tuple)):
        return []
    items = []
    for entry in raw:
        item = validate_item(entry)
        if item is not None:
            items.append(item)
    return items


def validate_family(raw: Any) -> HouseholdProfile:
    """Sanitize a household profile. Non-object input yields the default profile."""
    if isinstance(raw, HouseholdProfile):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        return HouseholdRecord(**DEFAULT_FAMILY).to_profile()
    return HouseholdRecord.model_validate(dict(raw)).to_profile()


def validate_alert_months(raw: Any) -> int:
    """Alert threshold in months, one of 1/2/3/6; defaults to 2."""
    months = parse_int(raw)
    if isinstance(raw, float) and not raw.is_integer():
        months = None
    return months if months in ALLOWED_ALERT_MONTHS else DEFAULT_ALERT_MONTHS
