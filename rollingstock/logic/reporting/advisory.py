"""Rule-based stockpile advisor.

Builds a report with five independent sections:
  1. overall grade from average coverage and the expired count
  2. water / calorie coverage detail with shortage and restock hints
  3. expiry summary
  4. category balance
  5. recommendations from an ordered rule table

The report is deterministic: same inputs, same report, same order.
"""
from __future__ import annotations
import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.logic.expiry.classifier import ExpiryAlerts, Instant, compute_expiry_alerts
from rollingstock.logic.inventory.sufficiency import Coverage, compute_coverage
from rollingstock.utilities.constants import (
    DEFAULT_ALERT_MONTHS,
    RATION_UNIT_KCAL,
    WATER_CONTAINER_LITERS,
)

__all__ = [
    "Grade", "CoverageDetail", "ExpirySummary", "CategoryBalance", "Recommendation",
    "Report", "grade_for", "coverage_details", "expiry_summary", "category_balance",
    "recommendations", "build_report", "advise",
]


class Grade(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    CRITICAL = "critical"

    @property
    def message(self) -> str:
        return _GRADE_MESSAGES[self]


_GRADE_MESSAGES = {
    Grade.EXCELLENT: "Your stockpile is in excellent shape. Keep managing it the way you do.",
    Grade.GOOD: "Your stockpile is mostly in good shape, with some room for improvement.",
    Grade.NEEDS_IMPROVEMENT: "Your stockpile is short. Plan to restock soon.",
    Grade.CRITICAL: "Your stockpile is severely short. Secure essential supplies right away.",
}


@dataclass(frozen=True)
class CoverageDetail:
    resource: str
    coverage: int
    status: str
    unit: str
    shortage: Optional[int] = None
    restock_count: Optional[int] = None
    hint: str = ""

    def to_dict(self):
        return {
            'resource': self.resource,
            'coverage': self.coverage,
            'status': self.status,
            'unit': self.unit,
            'shortage': self.shortage,
            'restockCount': self.restock_count,
            'hint': self.hint,
        }


@dataclass(frozen=True)
class ExpirySummary:
    expired_count: int
    due_soon_count: int
    rolling_count: int
    alert_months: int
    status: str
    messages: Tuple[str, ...] = ()

    def to_dict(self):
        return {
            'expiredCount': self.expired_count,
            'dueSoonCount': self.due_soon_count,
            'rollingCount': self.rolling_count,
            'alertMonths': self.alert_months,
            'status': self.status,
            'messages': list(self.messages),
        }


@dataclass(frozen=True)
class CategoryBalance:
    category_count: int
    tier: str
    counts: Dict[str, int] = field(default_factory=dict)
    missing_medicine: bool = False
    missing_daily: bool = False
    messages: Tuple[str, ...] = ()

    def to_dict(self):
        return {
            'categoryCount': self.category_count,
            'tier': self.tier,
            'counts': dict(self.counts),
            'missingMedicine': self.missing_medicine,
            'missingDaily': self.missing_daily,
            'messages': list(self.messages),
        }


@dataclass(frozen=True)
class Recommendation:
    code: str
    message: str

    def to_dict(self):
        return {'code': self.code, 'message': self.message}


@dataclass(frozen=True)
class Report:
    grade: Grade
    average_coverage: float
    coverage: Tuple[CoverageDetail, ...]
    expiry: ExpirySummary
    categories: CategoryBalance
    recommendations: Tuple[Recommendation, ...]

    def to_dict(self):
        return {
            'grade': self.grade.value,
            'gradeMessage': self.grade.message,
            'averageCoverage': self.average_coverage,
            'coverage': [c.to_dict() for c in self.coverage],
            'expiry': self.expiry.to_dict(),
            'categories': self.categories.to_dict(),
            'recommendations': [r.to_dict() for r in self.recommendations],
        }


# --- 1. Overall grade ------------------------------------------------------
def grade_for(average_coverage: float, expired_count: int) -> Grade:
    """First matching tier wins; many expired items pull a well-covered stock down."""
    if average_coverage >= 100 and expired_count == 0:
        return Grade.EXCELLENT
    if average_coverage >= 80 and expired_count <= 2:
        return Grade.GOOD
    if average_coverage >= 50:
        return Grade.NEEDS_IMPROVEMENT
    return Grade.CRITICAL


# --- 2. Coverage detail ----------------------------------------------------
def _coverage_detail(resource: str, unit: str, coverage: int, need: float, have: float,
                     per_container: int, hint: str) -> CoverageDetail:
    if coverage >= 100:
        return CoverageDetail(resource=resource, coverage=coverage, status='sufficient', unit=unit,
                              hint="Target reached. Stock is well managed.")
    shortage = max(0, math.ceil(need - have))
    restock = math.ceil(shortage / per_container)
    return CoverageDetail(
        resource=resource,
        coverage=coverage,
        status='critical' if coverage < 50 else 'shortage',
        unit=unit,
        shortage=shortage,
        restock_count=restock,
        hint=hint.format(count=restock),
    )


def coverage_details(coverage: Coverage) -> Tuple[CoverageDetail, ...]:
    return (
        _coverage_detail('water', 'L', coverage.water_cov, coverage.needs.need_water,
                         coverage.totals.water_l, WATER_CONTAINER_LITERS,
                         "Buy about {count} more 2 L bottles."),
        _coverage_detail('kcal', 'kcal', coverage.kcal_cov, coverage.needs.need_kcal,
                         coverage.totals.kcal, RATION_UNIT_KCAL,
                         "Add about {count} cans or ready meals (~300 kcal each)."),
    )


# --- 3. Expiry summary -----------------------------------------------------
def expiry_summary(alerts: ExpiryAlerts) -> ExpirySummary:
    expired, near, rolling = len(alerts.expired), len(alerts.near), len(alerts.rolling)
    messages: List[str] = []
    if expired:
        messages.append(f"Expired: {expired} item(s). Check them now and use or discard them.")
    if near:
        messages.append(f"Expiring soon: {near} item(s) within {alerts.alert_months} month(s). "
                        "Plan to use them.")
    if rolling:
        messages.append(f"Rolling stock: {rolling} item(s). Use them day to day and replace them "
                        "with fresh stock.")
    good = expired == 0 and near == 0
    if good:
        messages.append("Expiry management is good. Nothing is expired or expiring soon.")
    return ExpirySummary(
        expired_count=expired,
        due_soon_count=near,
        rolling_count=rolling,
        alert_months=alerts.alert_months,
        status='good' if good else 'attention',
        messages=tuple(messages),
    )


# --- 4. Category balance ---------------------------------------------------
def category_balance(items: Sequence[StockItem]) -> CategoryBalance:
    counts = Counter(item.category for item in items)
    count = len(counts)
    messages: List[str] = []
    if count >= 5:
        tier = 'balanced'
        messages.append("Categories are well balanced.")
    elif count >= 3:
        tier = 'skewed'
        messages.append("Categories are somewhat skewed. Consider medicine, daily goods and tools.")
    else:
        tier = 'poor'
        messages.append("Categories are unbalanced. Aim for a more varied stockpile.")

    missing_medicine = 'medicine' not in counts
    missing_daily = 'daily' not in counts
    if missing_medicine:
        messages.append("No medicine registered. Stock regular medication and a first-aid kit.")
    if missing_daily:
        messages.append("Add daily goods such as toilet paper and soap.")
    return CategoryBalance(
        category_count=count,
        tier=tier,
        counts=dict(counts),
        missing_medicine=missing_medicine,
        missing_daily=missing_daily,
        messages=tuple(messages),
    )


# --- 5. Recommendations ----------------------------------------------------
@dataclass(frozen=True)
class _Context:
    items: Sequence[StockItem]
    profile: HouseholdProfile
    coverage: Coverage
    alerts: ExpiryAlerts

    @property
    def has_items(self) -> bool:
        return len(self.items) > 0

    @property
    def categories(self):
        return {item.category for item in self.items}


Rule = Tuple[str, Callable[[_Context], bool], str]

# Evaluated top to bottom; the order here is the order of the output.
RULES: Tuple[Rule, ...] = (
    ('starter', lambda c: not c.has_items,
     "Start with the basics: water, shelf-stable food, medicine and a flashlight."),
    ('water', lambda c: c.has_items and c.coverage.water_cov < 70,
     "Top priority: increase your water stock."),
    ('food', lambda c: c.has_items and c.coverage.kcal_cov < 70,
     "Next: add long-shelf-life food such as canned goods and ready meals."),
    ('review_expired', lambda c: c.has_items and len(c.alerts.expired) > 3,
     "Many items have expired. Review your stock regularly."),
    ('weekly_rotation', lambda c: c.has_items and len(c.alerts.rolling) > 5,
     "Many items are due for rolling stock. Plan to use them week by week."),
    ('pet_supplies', lambda c: c.has_items and c.profile.pets > 0 and 'pet-food' not in c.categories,
     "Don't forget supplies for your pets (food and water)."),
    ('infant_supplies', lambda c: c.has_items and c.profile.children > 0,
     "With small children, formula, baby food and diapers are essential."),
    ('elder_care', lambda c: c.has_items and c.profile.seniors > 0,
     "For seniors, consider regular medication, care supplies and soft foods."),
)

MAINTAIN = Recommendation('maintain', "Your stockpile is well stocked. Keep up regular maintenance.")


def recommendations(items: Sequence[StockItem], profile: HouseholdProfile,
                    coverage: Coverage, alerts: ExpiryAlerts) -> Tuple[Recommendation, ...]:
    context = _Context(items=items, profile=profile, coverage=coverage, alerts=alerts)
    fired = tuple(Recommendation(code, message) for code, applies, message in RULES if applies(context))
    return fired or (MAINTAIN,)


# --- Report ------------------------------------------------------------------
def build_report(items: Sequence[StockItem], profile: HouseholdProfile,
                 coverage: Coverage, alerts: ExpiryAlerts) -> Report:
    """Assemble the report from precomputed coverage and expiry alerts."""
    return Report(
        grade=grade_for(coverage.average, len(alerts.expired)),
        average_coverage=coverage.average,
        coverage=coverage_details(coverage),
        expiry=expiry_summary(alerts),
        categories=category_balance(items),
        recommendations=recommendations(items, profile, coverage, alerts),
    )


def advise(items: Sequence[StockItem], profile: HouseholdProfile, now: Instant = None,
           alert_months: int = DEFAULT_ALERT_MONTHS) -> Report:
    """Evaluate the stock against the household and produce the advisory report."""
    items = list(items)
    coverage = compute_coverage(items, profile)
    alerts = compute_expiry_alerts(items, now, alert_months)
    return build_report(items, profile, coverage, alerts)
