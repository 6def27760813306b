import sys
from typing import Final

APP_NAME: Final[str] = "rollingstock-planner"
SNAPSHOT_VERSION: Final[int] = 1

DATE_FORMAT: Final[str] = "%Y-%m-%d"

CATEGORIES: Final[tuple[str, ...]] = (
    "food", "water", "medicine", "pet-food", "daily", "tool", "other"
)
DEFAULT_CATEGORY: Final[str] = "other"
CATEGORY_LABELS: Final[dict[str, str]] = {
    "food": "Food",
    "water": "Water",
    "medicine": "Medicine",
    "pet-food": "Pet food",
    "daily": "Daily goods",
    "tool": "Tools",
    "other": "Other",
}

# Units that mark an item as water regardless of its category
WATER_UNITS: Final[tuple[str, ...]] = ("l", "ℓ")

NAME_MAX_LENGTH: Final[int] = 200
UNIT_MAX_LENGTH: Final[int] = 50
EXPIRY_MAX_LENGTH: Final[int] = 20

MEMBER_MIN: Final[int] = 0
MEMBER_MAX: Final[int] = 100
ALLOWED_DAYS: Final[tuple[int, ...]] = (3, 7, 14, 30, 180)
DEFAULT_DAYS: Final[int] = 7
DEFAULT_FAMILY: Final[dict[str, int]] = {
    "adults": 1, "children": 0, "seniors": 0, "dogs": 0, "cats": 0, "days": DEFAULT_DAYS
}

ALLOWED_ALERT_MONTHS: Final[tuple[int, ...]] = (1, 2, 3, 6)
DEFAULT_ALERT_MONTHS: Final[int] = 2

# Liters per day
WATER_PER_DAY: Final[dict[str, float]] = {
    "adults": 4, "children": 2, "seniors": 3, "dogs": 1, "cats": 0.3
}
# kcal per day (pets are not counted)
KCAL_PER_DAY: Final[dict[str, int]] = {
    "adults": 2000, "children": 1400, "seniors": 1800
}

WATER_CONTAINER_LITERS: Final[int] = 2
RATION_UNIT_KCAL: Final[int] = 300

SORT_KEYS: Final[tuple[str, ...]] = ("expiryAsc", "expiryDesc", "nameAsc", "nameDesc", "catAsc")

# Stock sums that overflow float range are reported at this ceiling
MAX_AMOUNT: Final[float] = sys.float_info.max
