import unittest
from datetime import date
from rollingstock.domain.StockItem import StockItem
from rollingstock.events import web_observers
from rollingstock.events.Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, INVENTORY_EXPIRY_SNAPSHOT,
)
from rollingstock.events.event_helpers import publish_expiry_alerts
from rollingstock.logic.expiry.classifier import compute_expiry_alerts

TODAY = date(2026, 10, 18)


class TestEventBus(unittest.TestCase):

    def test_broken_subscriber_does_not_block_others(self):
        bus = EventBus()
        received = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe('x', broken)
        bus.subscribe('x', lambda name, payload: received.append(payload))
        with self.assertLogs('rollingstock.events.Event_Bus', level='ERROR'):
            bus.publish('x', 1)
        self.assertEqual(received, [1])

    def test_unsubscribe_unknown_is_noop(self):
        EventBus().unsubscribe('x', print)


class TestAlertFeed(unittest.TestCase):

    def setUp(self):
        web_observers.start()
        self.snapshots = []
        self._listener = lambda name, payload: self.snapshots.append(payload)
        GLOBAL_EVENT_BUS.subscribe(INVENTORY_EXPIRY_SNAPSHOT, self._listener)

    def tearDown(self):
        GLOBAL_EVENT_BUS.unsubscribe(INVENTORY_EXPIRY_SNAPSHOT, self._listener)

    def test_publish_alerts_feeds_buffer(self):
        cursor = web_observers.get_events()['next_cursor']
        items = [
            StockItem(name="Milk", expiry="2026-10-10"),
            StockItem(name="Bread", unit="loaf", quantity=1, expiry="2026-10-25"),
            StockItem(name="Rice", expiry="2028-01-01"),
        ]
        publish_expiry_alerts(compute_expiry_alerts(items, TODAY, 2), TODAY)

        feed = web_observers.get_events(since=cursor)
        events = feed['events']
        self.assertEqual([(e['type'], e['name']) for e in events],
                         [('inventory.expired', 'Milk'), ('inventory.due_soon', 'Bread')])
        self.assertEqual(events[0]['days_left'], -8)
        self.assertEqual(events[1]['alert_months'], 2)
        self.assertEqual(feed['next_cursor'], events[-1]['id'])
        self.assertEqual(web_observers.get_events(since=feed['next_cursor'])['events'], [])
        self.assertEqual(self.snapshots[-1], {'expired': 1, 'near': 1, 'rolling': 1, 'alert_months': 2})

    def test_start_is_idempotent(self):
        web_observers.start()
        cursor = web_observers.get_events()['next_cursor']
        publish_expiry_alerts(compute_expiry_alerts([StockItem(name="Old", expiry="2020-01-01")], TODAY, 2), TODAY)
        self.assertEqual(len(web_observers.get_events(since=cursor)['events']), 1)


if __name__ == '__main__':
    unittest.main()
