"""Budget tracker: the state and mutation engine of a trip budget."""

import math
import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Tuple

from logger import get_logger
from models.category import Category, CategoryDraft, slugify
from models.expense import MAX_AMOUNT, Expense, ExpenseDraft
from models.trip import TrackerState, Trip
from services import defaults
from tools import totals
from tools.formatting import to_input_date

logger = get_logger()

RESET_PROMPT = "Reset trip, budget, and all expenses?"


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def parse_amount(value) -> Optional[Decimal]:
    """Parse an entered amount.

    The result is normalised to the nearest double so that it survives the
    JSON snapshot unchanged, e.g. "0.12345678901234567891" becomes
    Decimal("0.12345678901234568").

    Args:
        value: Amount as typed (string) or as a number.

    Returns:
        The amount as a Decimal, or None if it is not a number a double can
        hold finitely.
    """
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None

    as_float = float(amount)
    if not math.isfinite(as_float):
        return None
    return Decimal(repr(as_float))


def coerce_budget(value) -> Decimal:
    """Coerce budget input to a number without validating it.

    Negative numbers are kept, blank input becomes 0 and anything else
    that is not a number a double can hold finitely (e.g. "1e400") becomes NaN.
    """
    if isinstance(value, str) and not value.strip():
        return Decimal("0")
    amount = parse_amount(value)
    return amount if amount is not None else Decimal("NaN")


class BudgetTracker:
    """Holds the state of a trip budget and applies user mutations.

    Each mutation that changes the state replaces it with a new TrackerState
    and writes exactly one snapshot through the persistence service. Invalid
    input is rejected silently: the mutation returns None/False and nothing
    is written.

    Args:
        persistence: Service with load()/save(state), or None to keep state in memory only.
        id_factory: Callable generating expense ids.
        color_picker: Callable returning a color for a new category.
        today: Callable returning the default date of new expenses.
    """

    def __init__(
        self,
        persistence=None,
        id_factory: Callable[[], str] = _new_id,
        color_picker: Callable[[], str] = defaults.random_category_color,
        today: Callable[[], date] = date.today,
    ):
        self.persistence = persistence
        self._id_factory = id_factory
        self._color_picker = color_picker
        self._today = today

        self.state = defaults.default_state()
        self.draft = self._fresh_draft()
        self.category_draft = CategoryDraft(label="", color=self._color_picker())

    # --- Persistence

    def load(self) -> TrackerState:
        """Initialize the state from the persisted snapshot.

        Called once at startup. Loading does not write a snapshot.
        """
        if self.persistence is not None:
            self.state = self.persistence.load()
        return self.state

    def _commit(self, state: TrackerState) -> bool:
        if state == self.state:
            return False
        self.state = state
        if self.persistence is not None:
            self.persistence.save(state)
        return True

    # --- Read access

    @property
    def trip(self) -> Trip:
        return self.state.trip

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self.state.categories

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return self.state.expenses

    @property
    def total_spent(self) -> Decimal:
        return totals.total_spent(self.state)

    @property
    def remaining(self) -> Decimal:
        return totals.remaining(self.state)

    @property
    def percent_used(self) -> Decimal:
        return totals.percent_used(self.state)

    @property
    def by_category(self) -> List[totals.CategoryTotal]:
        return totals.by_category(self.state)

    @property
    def chart_data(self) -> List[totals.ChartSlice]:
        return totals.chart_data(self.state)

    def summary(self) -> totals.BudgetSummary:
        return totals.get_summary(self.state)

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        for expense in self.state.expenses:
            if expense.id == expense_id:
                return expense
        return None

    def find_category(self, key: str) -> Optional[Category]:
        for category in self.state.categories:
            if category.key == key:
                return category
        return None

    # --- Mutations

    def add_expense(self, draft: Optional[ExpenseDraft] = None) -> Optional[Expense]:
        """Log an expense from a draft.

        The draft is valid when its name is not blank and its amount parses
        to a number above zero and no larger than MAX_AMOUNT. On success
        the new expense is put first in the list and the draft's name and
        amount are cleared; its category and date are kept for the next
        entry.

        Args:
            draft: Draft to submit. Defaults to the tracker's own draft.

        Returns:
            The created Expense, or None if the draft was rejected.
        """
        draft = draft if draft is not None else self.draft

        name = (draft.name or "").strip()
        amount = parse_amount(draft.amount)
        if not name or amount is None or not 0 < amount <= MAX_AMOUNT:
            logger.debug(f"Rejected expense draft {draft!r}")
            return None

        expense = Expense(
            id=self._id_factory(),
            name=name,
            amount=amount,
            category=draft.category,
            date=draft.date,
        )
        self._commit(replace(self.state, expenses=(expense,) + self.state.expenses))

        draft.name = ""
        draft.amount = ""
        return expense

    def remove_expense(self, expense_id: str) -> bool:
        """Remove the expense with the given id.

        Returns:
            True if an expense was removed, False if no expense had that id.
        """
        expenses = tuple(e for e in self.state.expenses if e.id != expense_id)
        if len(expenses) == len(self.state.expenses):
            return False
        return self._commit(replace(self.state, expenses=expenses))

    def add_category(self, label: str, color: Optional[str] = None) -> Optional[Category]:
        """Append a new category.

        The key is derived from the label with slugify. Blank labels and
        labels whose key already exists are rejected.

        Args:
            label: Display label of the category.
            color: Category color. Defaults to the category draft's color,
                or a random palette color.

        Returns:
            The created Category, or None if it was rejected.
        """
        label = (label or "").strip()
        if not label:
            return None

        key = slugify(label)
        if self.find_category(key) is not None:
            logger.debug(f"Rejected category '{label}': key '{key}' already exists")
            return None

        category = Category(
            key=key,
            label=label,
            color=color or self.category_draft.color or self._color_picker(),
        )
        self._commit(replace(self.state, categories=self.state.categories + (category,)))

        self.category_draft = CategoryDraft(label="", color=self._color_picker())
        self.draft.category = key
        return category

    def set_budget(self, value) -> Decimal:
        """Replace the budget. Input is coerced with coerce_budget, not validated."""
        budget = coerce_budget(value)
        self._commit(replace(self.state, budget=budget))
        return budget

    def set_trip_name(self, value: str) -> None:
        """Replace the trip name."""
        self._commit(replace(self.state, trip_name=value))

    def reset_all(self, confirm: Callable[[str], bool]) -> bool:
        """Restore the default trip, budget and categories and drop all expenses.

        Args:
            confirm: Blocking yes/no prompt, called with the question to ask.

        Returns:
            True if the reset was confirmed and applied, False if declined.
        """
        if not confirm(RESET_PROMPT):
            logger.debug("Reset declined")
            return False

        self._commit(defaults.default_state())
        logger.info("Trip reset to defaults")
        return True

    def _fresh_draft(self) -> ExpenseDraft:
        first = self.state.categories[0].key if self.state.categories else ""
        return ExpenseDraft(
            name="",
            amount="",
            category=first,
            date=to_input_date(self._today()),
        )
