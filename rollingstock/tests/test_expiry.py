import unittest
from datetime import date, datetime, timedelta
from rollingstock.domain.StockItem import StockItem
from rollingstock.logic.expiry.classifier import (
    ExpiryState,
    add_months,
    classify_expiration,
    compute_expiry_alerts,
    is_rolling_candidate,
    warn_edge,
)


def _item(expiry, name="Item"):
    return StockItem(name=name, category="food", quantity=1, unit="pcs", expiry=expiry)


class TestAddMonths(unittest.TestCase):

    def test_plain(self):
        self.assertEqual(add_months(date(2026, 3, 15), 2), date(2026, 5, 15))

    def test_day_clamped_to_month_end(self):
        self.assertEqual(add_months(date(2026, 1, 31), 1), date(2026, 2, 28))
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(add_months(date(2026, 1, 31), 2), date(2026, 3, 31))
        self.assertEqual(add_months(date(2026, 8, 31), 1), date(2026, 9, 30))

    def test_year_rollover(self):
        self.assertEqual(add_months(date(2025, 12, 15), 2), date(2026, 2, 15))
        self.assertEqual(add_months(date(2026, 11, 30), 6), date(2027, 5, 30))


class TestClassifyExpiration(unittest.TestCase):

    def test_expired(self):
        self.assertEqual(classify_expiration(_item("2020-01-01"), date(2025, 1, 1), 2), ExpiryState.EXPIRED)

    def test_due_today_ignores_clock_time(self):
        late_evening = datetime(2026, 10, 18, 23, 59)
        self.assertEqual(classify_expiration(_item("2026-10-18"), late_evening, 2), ExpiryState.DUE_TODAY)
        self.assertEqual(classify_expiration(_item("2026-10-18"), date(2026, 10, 18), 2), ExpiryState.DUE_TODAY)

    def test_due_soon_window_uses_calendar_months(self):
        today = date(2026, 1, 31)
        self.assertEqual(warn_edge(today, 2), date(2026, 3, 31))
        self.assertEqual(classify_expiration(_item((today + timedelta(days=1)).isoformat()), today, 2),
                         ExpiryState.DUE_SOON)
        self.assertEqual(classify_expiration(_item((today + timedelta(days=45)).isoformat()), today, 2),
                         ExpiryState.DUE_SOON)
        self.assertEqual(classify_expiration(_item("2026-03-31"), today, 2), ExpiryState.DUE_SOON)
        self.assertEqual(classify_expiration(_item("2026-04-01"), today, 2), ExpiryState.OK)
        self.assertEqual(classify_expiration(_item((today + timedelta(days=70)).isoformat()), today, 2),
                         ExpiryState.OK)

    def test_one_month_edge_from_month_end(self):
        today = date(2026, 1, 31)
        self.assertEqual(classify_expiration(_item("2026-02-28"), today, 1), ExpiryState.DUE_SOON)
        self.assertEqual(classify_expiration(_item("2026-03-01"), today, 1), ExpiryState.OK)

    def test_untracked(self):
        for expiry in ("", "someday", "2026-02-30", "2026/01/01"):
            self.assertEqual(classify_expiration(_item(expiry), date(2026, 1, 1), 2), ExpiryState.UNTRACKED)

    def test_exactly_one_state_for_dated_items(self):
        today = date(2026, 10, 18)
        dated = {ExpiryState.EXPIRED, ExpiryState.DUE_TODAY, ExpiryState.DUE_SOON, ExpiryState.OK}
        seen = set()
        for offset in range(-400, 400, 7):
            expiry = (today + timedelta(days=offset)).isoformat()
            for months in (1, 2, 3, 6):
                state = classify_expiration(_item(expiry), today, months)
                self.assertIn(state, dated)
                seen.add(state)
        seen.add(classify_expiration(_item(today.isoformat()), today, 2))
        self.assertEqual(seen, dated)


class TestRollingCandidates(unittest.TestCase):

    def test_window_is_inclusive(self):
        today = date(2026, 10, 18)
        self.assertTrue(is_rolling_candidate(_item("2026-10-18"), today))
        self.assertTrue(is_rolling_candidate(_item("2026-11-01"), today))
        self.assertFalse(is_rolling_candidate(_item("2026-11-02"), today))
        self.assertFalse(is_rolling_candidate(_item("2026-10-17"), today))
        self.assertFalse(is_rolling_candidate(_item(""), today))


class TestExpiryAlerts(unittest.TestCase):

    def test_split(self):
        today = date(2026, 10, 18)
        items = [
            _item("2026-10-25", "Bread"),
            _item("2026-10-01", "Milk"),
            _item("2026-10-18", "Yogurt"),
            _item("2027-06-01", "Rice"),
            _item("", "Soap"),
            _item("2026-12-01", "Crackers"),
        ]
        alerts = compute_expiry_alerts(items, today, 2)
        self.assertEqual([it.name for it in alerts.expired], ["Milk"])
        self.assertEqual([it.name for it in alerts.near], ["Bread", "Yogurt", "Crackers"])
        # sorted by expiry
        self.assertEqual([it.name for it in alerts.rolling], ["Yogurt", "Bread"])
        self.assertEqual(alerts.to_dict()['alertMonths'], 2)


if __name__ == '__main__':
    unittest.main()
