"""Derived budget aggregates.

Every function here is a pure function of a TrackerState; nothing is cached
or stored, values are recomputed on each call.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, List

from models.trip import TrackerState

_CENTS = Decimal("0.01")
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class CategoryTotal:
    """Spend of a single category."""

    key: str
    label: str
    color: str
    total: Decimal


@dataclass(frozen=True)
class ChartSlice:
    """One slice of the category breakdown chart."""

    name: str  # category label
    value: Decimal  # rounded to cents
    color: str


@dataclass(frozen=True)
class BudgetSummary:
    """All aggregates shown on the dashboard."""

    total_spent: Decimal
    remaining: Decimal
    percent_used: Decimal
    by_category: List[CategoryTotal]
    chart_data: List[ChartSlice]


def total_spent(state: TrackerState) -> Decimal:
    """Sum of all expense amounts, including unknown categories."""
    return sum((e.amount for e in state.expenses), _ZERO)


def remaining(state: TrackerState) -> Decimal:
    """Budget left, never below zero.

    A budget that is not a finite number has nothing remaining.
    """
    if not state.budget.is_finite():
        return _ZERO
    return max(_ZERO, state.budget - total_spent(state))


def percent_used(state: TrackerState) -> Decimal:
    """Share of the budget spent, clamped to [0, 100].

    Returns 0 when the budget is zero, negative or not a number.
    """
    budget = state.budget
    if budget.is_nan() or budget <= 0:
        return _ZERO
    percent = total_spent(state) / budget * _HUNDRED
    return max(_ZERO, min(_HUNDRED, percent))


def by_category(state: TrackerState) -> List[CategoryTotal]:
    """Per-category spend, in category insertion order.

    Every category appears, with a zero total when it has no expenses.
    Expenses referencing an unknown category key are left out.
    """
    totals: Dict[str, Decimal] = {c.key: _ZERO for c in state.categories}

    for expense in state.expenses:
        if expense.category not in totals:
            continue
        totals[expense.category] += expense.amount

    return [
        CategoryTotal(key=c.key, label=c.label, color=c.color, total=totals[c.key])
        for c in state.categories
    ]


def chart_data(state: TrackerState) -> List[ChartSlice]:
    """Categories with positive spend, totals rounded to cents."""
    slices = []
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the cents
        ctx.prec = max(ctx.prec, total_spent(state).adjusted() + 3)
        for c in by_category(state):
            if c.total > 0:
                slices.append(
                    ChartSlice(
                        name=c.label,
                        value=c.total.quantize(_CENTS, rounding=ROUND_HALF_UP),
                        color=c.color,
                    )
                )
    return slices


def get_summary(state: TrackerState) -> BudgetSummary:
    """Compute every aggregate for the given state."""
    return BudgetSummary(
        total_spent=total_spent(state),
        remaining=remaining(state),
        percent_used=percent_used(state),
        by_category=by_category(state),
        chart_data=chart_data(state),
    )
