import json
import tempfile
import unittest
from datetime import date
from pathlib import Path
from fastapi.testclient import TestClient
from rollingstock.api.api_run import app
from rollingstock.api.dependencies import get_backup_manager, get_repository, get_today
from rollingstock.infra.Snapshot_Repository import SnapshotRepository
from rollingstock.utilities.backup import BackupManager

TODAY = date(2026, 10, 18)


class TestInventoryAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        data_dir = Path(self._tmp.name)
        self.repo = SnapshotRepository(data_dir / 'rollingstock.json')
        self.backups = BackupManager(data_dir, data_dir / 'backups')
        app.dependency_overrides[get_repository] = lambda: self.repo
        app.dependency_overrides[get_backup_manager] = lambda: self.backups
        app.dependency_overrides[get_today] = lambda: TODAY
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def _add(self, **data):
        resp = self.client.post('/api/items', json=data)
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_health(self):
        with TestClient(app) as client:
            self.assertEqual(client.get('/health').json(), {'status': 'ok'})

    def test_item_crud(self):
        added = self._add(name="Rice", category="food", quantity=2, unit="kg", kcal=3500, expiry="2027-05-01")
        self.assertEqual(added['index'], 0)
        self.assertEqual(added['status'], 'ok')
        self._add(name="Water", category="water", quantity=6, unit="L")

        resp = self.client.put('/api/items/1', json={"name": "Water", "category": "water", "quantity": 12, "unit": "L"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['item']['quantity'], 12)

        listing = self.client.get('/api/items', params={'q': 'wat'}).json()
        self.assertEqual(listing['total'], 1)
        self.assertEqual(listing['rows'][0]['index'], 1)

        self.assertEqual(self.client.delete('/api/items/0').json()['deleted']['name'], 'Rice')
        self.assertEqual(self.client.delete('/api/items/5').status_code, 404)
        self.assertEqual(self.client.put('/api/items/5', json={"name": "X"}).status_code, 404)

    def test_nameless_item_rejected(self):
        resp = self.client.post('/api/items', json={"name": "   ", "quantity": 3})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.repo.load_items(), [])

    def test_clear_items_backs_up_first(self):
        self._add(name="Rice")
        self.assertEqual(self.client.delete('/api/items').json(), {'cleared': 1})
        self.assertEqual(len(self.backups.list_backups('rollingstock.json')), 1)
        self.assertEqual(self.client.get('/api/items').json()['total'], 0)

    def test_family_and_needs(self):
        resp = self.client.put('/api/family', json={"adults": 2, "children": 1, "seniors": 0, "dogs": 1, "cats": 0, "days": 3})
        self.assertEqual(resp.json()['needs'], {
            'waterPerDay': 11, 'kcalPerDay': 5400, 'needWater': 33, 'needKcal': 16200,
        })
        self.assertEqual(self.client.get('/api/needs').json()['needWater'], 33)
        reset = self.client.post('/api/family/reset').json()
        self.assertEqual(reset['family']['adults'], 1)
        self.assertEqual(reset['family']['days'], 7)

    def test_alert_months(self):
        self.assertEqual(self.client.get('/api/alert-months').json(), {'alertMonths': 2})
        self.assertEqual(self.client.put('/api/alert-months', json={'alertMonths': 6}).json(), {'alertMonths': 6})
        self.assertEqual(self.client.put('/api/alert-months', json={'alertMonths': 4}).json(), {'alertMonths': 2})

    def test_coverage_and_advice(self):
        self.client.put('/api/family', json={"adults": 1, "days": 3})
        self._add(name="Water", category="water", quantity=5, unit="L")
        self._add(name="Rice", category="food", quantity=1, unit="kg", kcal=4000)

        coverage = self.client.get('/api/coverage').json()
        self.assertEqual((coverage['waterCov'], coverage['kcalCov']), (42, 67))
        self.assertEqual(self.client.get('/api/totals').json(), {'waterL': 5, 'kcal': 4000})

        advice = self.client.get('/api/advice').json()
        self.assertEqual(advice['grade'], 'needs_improvement')
        self.assertEqual([r['code'] for r in advice['recommendations']], ['water', 'food'])

    def test_expiry_alerts_reach_feed(self):
        self._add(name="Milk", expiry="2026-10-10")
        self._add(name="Bread", expiry="2026-10-25")
        with TestClient(app) as client:
            cursor = client.get('/api/alerts/events').json()['next_cursor']
            alerts = client.get('/api/expiry').json()
            self.assertEqual([i['name'] for i in alerts['expired']], ['Milk'])
            self.assertEqual([i['name'] for i in alerts['rolling']], ['Bread'])
            feed = client.get('/api/alerts/events', params={'since': cursor}).json()
        self.assertEqual([e['name'] for e in feed['events']], ['Milk', 'Bread'])

    def test_export_import(self):
        self._add(name="Rice", category="food", quantity=2, unit="kg", kcal=3500)
        exported = self.client.get('/api/export')
        self.assertIn('attachment', exported.headers['content-disposition'])
        snapshot = exported.json()
        self.assertEqual(snapshot['items'][0]['name'], 'Rice')

        snapshot['items'].append({"name": "Tea", "category": "food"})
        snapshot['alertMonths'] = 3
        resp = self.client.post('/api/import', files={'file': ('data.json', json.dumps(snapshot), 'application/json')})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['items'], 2)
        self.assertEqual(self.repo.load_alert_months(), 3)
        self.assertEqual(len(self.backups.list_backups('rollingstock.json')), 1)

        csv_resp = self.client.get('/api/export.csv')
        self.assertTrue(csv_resp.text.startswith('name,category'))

    def test_rejected_import_leaves_state(self):
        self._add(name="Rice")
        resp = self.client.post('/api/import', files={'file': ('data.json', b'{broken', 'application/json')})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual([i.name for i in self.repo.load_items()], ['Rice'])

    def test_stats_and_pdf(self):
        self._add(name="Water", category="water", quantity=6, unit="L")
        stats = self.client.get('/api/stats').json()
        self.assertEqual(stats['summary']['item_count'], 1)
        self.assertEqual(stats['by_category'][0]['label'], 'Water')

        pdf = self.client.get('/api/report.pdf')
        self.assertEqual(pdf.status_code, 200)
        self.assertEqual(pdf.headers['content-type'], 'application/pdf')
        self.assertTrue(pdf.content.startswith(b'%PDF'))


if __name__ == '__main__':
    unittest.main()
