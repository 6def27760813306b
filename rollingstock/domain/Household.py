"""Household profile: people and pets to supply, and the planning horizon in days."""
from dataclasses import dataclass

from rollingstock.utilities.constants import DEFAULT_DAYS


@dataclass(frozen=True)
class HouseholdProfile:
    adults: int = 1
    children: int = 0
    seniors: int = 0
    dogs: int = 0
    cats: int = 0
    days: int = DEFAULT_DAYS

    @property
    def people(self) -> int:
        return self.adults + self.children + self.seniors

    @property
    def pets(self) -> int:
        return self.dogs + self.cats

    def to_dict(self):
        return {
            "adults": self.adults,
            "children": self.children,
            "seniors": self.seniors,
            "dogs": self.dogs,
            "cats": self.cats,
            "days": self.days,
        }
