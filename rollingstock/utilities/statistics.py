"""
Statistics for the RollingStock Planner.
Provides the figures behind the dashboard charts: stock by category,
water and calorie coverage bars, and the summary row.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Sequence

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.logic.inventory.sufficiency import compute_coverage
from rollingstock.utilities.constants import CATEGORY_LABELS, MAX_AMOUNT


class InventoryStats:
    """Generate statistics from an inventory snapshot."""

    def __init__(self, items: Sequence[StockItem], family: HouseholdProfile):
        self.items = list(items)
        self.family = family

    def quantity_by_category(self) -> List[Dict]:
        """Total quantity per category, in first-seen order."""
        totals: Dict[str, float] = defaultdict(float)
        for item in self.items:
            totals[item.category] += item.quantity
        return [
            {'category': cat, 'label': CATEGORY_LABELS.get(cat, cat), 'quantity': min(qty, MAX_AMOUNT)}
            for cat, qty in totals.items()
        ]

    def coverage_bars(self) -> Dict[str, Dict[str, float]]:
        """Need / stock / percent for water and calories."""
        cov = compute_coverage(self.items, self.family)
        return {
            'water': {'need': cov.needs.need_water, 'stock': cov.totals.water_l, 'percent': cov.water_cov},
            'kcal': {'need': cov.needs.need_kcal, 'stock': cov.totals.kcal, 'percent': cov.kcal_cov},
        }

    def summary(self) -> Dict[str, float]:
        cov = compute_coverage(self.items, self.family)
        return {
            'item_count': len(self.items),
            'water_l': round(cov.totals.water_l, 2),
            'kcal': round(cov.totals.kcal, 2),
        }

    def generate_report(self) -> Dict:
        return {
            'by_category': self.quantity_by_category(),
            'coverage': self.coverage_bars(),
            'summary': self.summary(),
            'generated_at': datetime.now().isoformat()
        }

    def print_report(self):
        """Print a formatted statistics report."""
        report = self.generate_report()

        print("\n" + "="*60)
        print("📊 ROLLINGSTOCK STATISTICS REPORT")
        print("="*60)

        summary = report['summary']
        print(f"\nItems: {summary['item_count']}  |  Water: {summary['water_l']} L  |  Energy: {summary['kcal']} kcal")

        print("\n📦 STOCK BY CATEGORY:")
        for row in report['by_category']:
            print(f"  {row['label']:12s}: {row['quantity']:g}")

        print("\n💧 COVERAGE:")
        for name, bar in report['coverage'].items():
            print(f"  {name:6s}: {bar['stock']:g} / {bar['need']:g} ({bar['percent']}%)")

        print("\n" + "="*60)
        print(f"Report generated: {report['generated_at']}")
        print("="*60 + "\n")


# CLI interface
if __name__ == "__main__":
    from rollingstock.infra.Snapshot_Repository import SnapshotRepository

    state = SnapshotRepository().load_state()
    InventoryStats(state.items, state.family).print_report()
