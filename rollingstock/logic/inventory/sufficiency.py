"""Water and calorie sufficiency: stock totals, household needs, coverage ratios."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

from rollingstock.domain.Household import HouseholdProfile
from rollingstock.domain.StockItem import StockItem
from rollingstock.utilities.constants import KCAL_PER_DAY, MAX_AMOUNT, WATER_PER_DAY

__all__ = ["Totals", "Needs", "Coverage", "compute_totals", "compute_needs", "compute_coverage", "round_half_up"]


@dataclass(frozen=True)
class Totals:
    water_l: float = 0.0
    kcal: float = 0.0

    def to_dict(self):
        return {'waterL': self.water_l, 'kcal': self.kcal}


@dataclass(frozen=True)
class Needs:
    water_per_day: float = 0.0
    kcal_per_day: float = 0.0
    need_water: float = 0.0
    need_kcal: float = 0.0

    def to_dict(self):
        return {
            'waterPerDay': self.water_per_day,
            'kcalPerDay': self.kcal_per_day,
            'needWater': self.need_water,
            'needKcal': self.need_kcal,
        }


@dataclass(frozen=True)
class Coverage:
    water_cov: int
    kcal_cov: int
    totals: Totals
    needs: Needs

    @property
    def average(self) -> float:
        return (self.water_cov + self.kcal_cov) / 2

    def to_dict(self):
        return {
            'waterCov': self.water_cov,
            'kcalCov': self.kcal_cov,
            'totals': self.totals.to_dict(),
            'needs': self.needs.to_dict(),
        }


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def compute_totals(items: Iterable[StockItem]) -> Totals:
    """Sum water liters and calories over the current stock.

    Water quantities are taken as liters already; no unit conversion is done.
    Calories are per unit of quantity, so an entry contributes kcal * quantity.
    Sums too large for a float are capped at MAX_AMOUNT.
    """
    water_l = 0.0
    kcal = 0.0
    for item in items:
        if item.is_water:
            water_l += item.quantity
        if item.kcal is not None:
            kcal += item.total_kcal
    return Totals(water_l=min(water_l, MAX_AMOUNT), kcal=min(kcal, MAX_AMOUNT))


def compute_needs(profile: HouseholdProfile) -> Needs:
    """Daily and total requirements for the planning horizon."""
    water_per_day = sum(getattr(profile, member) * rate for member, rate in WATER_PER_DAY.items())
    kcal_per_day = sum(getattr(profile, member) * rate for member, rate in KCAL_PER_DAY.items())
    return Needs(
        water_per_day=water_per_day,
        kcal_per_day=kcal_per_day,
        need_water=water_per_day * profile.days,
        need_kcal=kcal_per_day * profile.days,
    )


def _ratio(have: float, need: float) -> int:
    if need <= 0:
        return 0
    percent = have / need * 100
    if not math.isfinite(percent):
        return 100
    return min(100, round_half_up(percent))


def compute_coverage(items: Iterable[StockItem], profile: HouseholdProfile) -> Coverage:
    """Percent of need covered by stock, capped at 100; zero need reports 0."""
    totals = compute_totals(items)
    needs = compute_needs(profile)
    return Coverage(
        water_cov=_ratio(totals.water_l, needs.need_water),
        kcal_cov=_ratio(totals.kcal, needs.need_kcal),
        totals=totals,
        needs=needs,
    )
