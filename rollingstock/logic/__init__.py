"""Inventory evaluation engine.

Subpackages:
- inventory: water/calorie totals, household needs, coverage, stock listing
- expiry: four-state expiration classification and rolling-stock candidates
- reporting: rule-based advisory report

Every function here is pure: it takes snapshots of items and profile and
returns new result structures without touching shared state.
"""
__all__ = ["inventory", "expiry", "reporting"]
