import unittest
from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.utilities.validators import (
    parse_float,
    parse_int,
    validate_alert_months,
    validate_family,
    validate_item,
    validate_items,
)

MESSY = [
    None,
    5,
    "rice",
    ["name", "list"],
    {"name": "   "},
    {"name": "  Rice  ", "category": "food", "quantity": "2.5kg", "unit": " bag ",
     "expiry": "2026-12-01", "kcal": "350", "createdAt": 1700000000000},
    {"name": "Mystery", "category": "weapons", "quantity": -3, "kcal": -5},
    {"name": "Water 2L x6", "category": "water", "quantity": 12, "unit": "L", "kcal": None},
    {"name": 42, "quantity": True, "unit": None, "expiry": None, "createdAt": "abc"},
]


class TestValidateItems(unittest.TestCase):

    def test_non_list_input_gives_empty_list(self):
        for raw in (None, "items", 12, {"name": "Rice"}):
            self.assertEqual(validate_items(raw), [])

    def test_drops_non_objects_and_empty_names(self):
        names = [it.name for it in validate_items(MESSY)]
        self.assertEqual(names, ["Rice", "Mystery", "Water 2L x6", "42"])

    def test_field_coercion(self):
        rice, mystery, water, numbered = validate_items(MESSY)
        self.assertEqual(rice.quantity, 2.5)
        self.assertEqual(rice.unit, "bag")
        self.assertEqual(rice.kcal, 350.0)
        self.assertEqual(rice.expiry, "2026-12-01")
        self.assertEqual(rice.created_at, 1700000000000)
        self.assertEqual(mystery.category, "other")
        self.assertEqual(mystery.quantity, 0)
        self.assertEqual(mystery.kcal, 0)
        self.assertIsNone(water.kcal)
        self.assertEqual(numbered.quantity, 0)
        self.assertEqual(numbered.unit, "")
        self.assertEqual(numbered.expiry, "")
        self.assertGreater(numbered.created_at, 0)

    def test_missing_kcal_means_no_calories(self):
        item = validate_item({"name": "Soap", "category": "daily"})
        self.assertIsNone(item.kcal)
        self.assertIsNone(item.total_kcal)

    def test_truncation(self):
        item = validate_item({"name": "n" * 250, "unit": "u" * 60, "expiry": "2026-12-01T10:00:00.000Z"})
        self.assertEqual(len(item.name), 200)
        self.assertEqual(len(item.unit), 50)
        self.assertEqual(item.expiry, "2026-12-01T10:00:00.")

    def test_non_finite_numbers_become_zero(self):
        item = validate_item({"name": "Odd", "quantity": float("inf"), "kcal": "NaN"})
        self.assertEqual(item.quantity, 0)
        self.assertEqual(item.kcal, 0)

    def test_idempotent(self):
        once = validate_items(MESSY)
        self.assertEqual(validate_items(once), once)
        self.assertEqual(validate_items([it.to_dict() for it in once]), once)

    def test_idempotent_at_truncation_and_timestamp_edges(self):
        raw = [
            {"name": "a" * 199 + " bccc", "unit": "u" * 49 + " x"},
            {"name": "Tea", "createdAt": 0.4},
            {"name": "Oats", "createdAt": "-0.9"},
        ]
        once = validate_items(raw)
        self.assertEqual(validate_items(once), once)
        self.assertEqual(once[0].name, "a" * 199)
        self.assertEqual(once[0].unit, "u" * 49)
        self.assertGreater(once[1].created_at, 0)
        self.assertGreater(once[2].created_at, 0)

    def test_text_fields_from_booleans_and_containers(self):
        item = validate_item({"name": True, "unit": [], "expiry": {}})
        self.assertEqual((item.name, item.unit, item.expiry), ("true", "", ""))
        self.assertIsNone(validate_item({"name": []}))
        self.assertIsNone(validate_item({"name": False}))

    def test_accepts_stock_items(self):
        item = StockItem(name="Rice", category="food", quantity=2, unit="bag", created_at=1)
        self.assertEqual(validate_item(item), item)


class TestValidateFamily(unittest.TestCase):

    def test_non_object_gives_default_profile(self):
        self.assertEqual(validate_family(None), HouseholdProfile(1, 0, 0, 0, 0, 7))
        self.assertEqual(validate_family([1, 2]), HouseholdProfile(1, 0, 0, 0, 0, 7))

    def test_missing_fields_become_zero(self):
        self.assertEqual(validate_family({}), HouseholdProfile(0, 0, 0, 0, 0, 7))

    def test_clamping(self):
        for v in (-5, 0, 1, 50, 100, 101, 10 ** 6):
            self.assertEqual(validate_family({"adults": v}).adults, max(0, min(100, v)))
            self.assertEqual(validate_family({"cats": v}).cats, max(0, min(100, v)))

    def test_integer_parsing(self):
        family = validate_family({"adults": "3.9", "children": 2.7, "seniors": "abc", "dogs": True})
        self.assertEqual((family.adults, family.children, family.seniors, family.dogs), (3, 2, 0, 0))

    def test_days(self):
        for days in (3, 7, 14, 30, 180):
            self.assertEqual(validate_family({"days": days}).days, days)
        self.assertEqual(validate_family({"days": "14"}).days, 14)
        self.assertEqual(validate_family({"days": 10}).days, 7)
        self.assertEqual(validate_family({"days": None}).days, 7)


class TestValidateAlertMonths(unittest.TestCase):

    def test_allowed_values(self):
        for months in (1, 2, 3, 6):
            self.assertEqual(validate_alert_months(months), months)

    def test_invalid_values_default_to_two(self):
        for raw in (0, 4, 12, -1, None, True, "abc", 2.5, [3]):
            self.assertEqual(validate_alert_months(raw), 2)

    def test_numeric_text_and_whole_floats(self):
        self.assertEqual(validate_alert_months("3"), 3)
        self.assertEqual(validate_alert_months(6.0), 6)


class TestNumberParsing(unittest.TestCase):

    def test_parse_int(self):
        self.assertEqual(parse_int("14 days"), 14)
        self.assertEqual(parse_int(-3.7), -3)
        self.assertIsNone(parse_int("x1"))
        self.assertIsNone(parse_int(False))

    def test_parse_float(self):
        self.assertEqual(parse_float("1.5e2kg"), 150.0)
        self.assertEqual(parse_float(".5"), 0.5)
        self.assertIsNone(parse_float("Infinity"))
        self.assertIsNone(parse_float({}))


if __name__ == '__main__':
    unittest.main()
