"""Trip and tracker state models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Tuple

from models.category import Category
from models.expense import Expense


@dataclass(frozen=True)
class Trip:
    """The tracked outing.

    Attributes:
        name: Trip display name.
        budget: Total budget. Not validated, so it may be negative or NaN.
    """

    name: str
    budget: Decimal


@dataclass(frozen=True)
class TrackerState:
    """Complete snapshot of a trip budget.

    Instances are never modified; every mutation builds a new state with
    dataclasses.replace.

    Attributes:
        trip_name: Name of the trip.
        budget: Total budget for the trip.
        categories: Categories in insertion order (defaults first).
        expenses: Expenses, newest entry first.
    """

    trip_name: str
    budget: Decimal
    categories: Tuple[Category, ...] = field(default_factory=tuple)
    expenses: Tuple[Expense, ...] = field(default_factory=tuple)

    @property
    def trip(self) -> Trip:
        return Trip(name=self.trip_name, budget=self.budget)

    def to_dict(self) -> dict:
        """Convert state to the persisted snapshot structure."""
        return {
            "tripName": self.trip_name,
            "budget": float(self.budget) if self.budget.is_finite() else None,
            "categories": [c.to_dict() for c in self.categories],
            "expenses": [e.to_dict() for e in self.expenses],
        }
