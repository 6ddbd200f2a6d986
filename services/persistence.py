"""Snapshot persistence for the tracker state.

The whole state is serialized as one JSON document and stored under a single
key. Loading is tolerant: every field of the snapshot falls back to its
default on its own, so a partially damaged snapshot still restores whatever
is usable.
"""

import json
from decimal import Decimal
from typing import List, Tuple

from pydantic import BaseModel, Field, ValidationError

from logger import get_logger
from models.category import Category
from models.expense import MAX_AMOUNT, Expense
from models.trip import TrackerState
from services import defaults
from services.tracker import parse_amount

logger = get_logger()

SNAPSHOT_VERSION = 1


# Pydantic models for snapshot entries
class CategoryRecord(BaseModel):
    """Category entry as stored in the snapshot."""

    key: str = Field(min_length=1)
    label: str
    color: str


class ExpenseRecord(BaseModel):
    """Expense entry as stored in the snapshot."""

    id: str = Field(min_length=1)
    name: str
    amount: float = Field(gt=0, le=float(MAX_AMOUNT), allow_inf_nan=False)
    category: str
    date: str


class PersistenceService:
    """Loads and saves the tracker state through a key-value store."""

    def __init__(self, store, key: str):
        """Initialize the persistence service.

        Args:
            store: Key-value store with get/set methods.
            key: Key the snapshot is stored under.
        """
        self.store = store
        self.key = key

    def save(self, state: TrackerState) -> None:
        """Serialize the state and overwrite the stored snapshot.

        Args:
            state: State to persist.
        """
        self.store.set(self.key, snapshot_for(state))
        logger.debug(
            f"Saved snapshot '{self.key}' "
            f"({len(state.categories)} categories, {len(state.expenses)} expenses)"
        )

    def load(self) -> TrackerState:
        """Restore the state from the stored snapshot.

        Returns:
            The restored state. A missing, unparseable or unsupported snapshot
            yields the default state.
        """
        raw = self.store.get(self.key)
        if raw is None:
            logger.info(f"No snapshot stored under '{self.key}', starting fresh")
            return defaults.default_state()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Snapshot '{self.key}' is not valid JSON ({e}), using defaults")
            return defaults.default_state()

        if not isinstance(data, dict):
            logger.warning(f"Snapshot '{self.key}' is not an object, using defaults")
            return defaults.default_state()

        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            logger.warning(
                f"Snapshot '{self.key}' has unsupported version {version!r}, using defaults"
            )
            return defaults.default_state()

        state = TrackerState(
            trip_name=_parse_trip_name(data.get("tripName")),
            budget=_parse_budget(data.get("budget")),
            categories=_parse_categories(data.get("categories")),
            expenses=_parse_expenses(data.get("expenses")),
        )
        logger.info(
            f"Loaded trip '{state.trip_name}' with {len(state.expenses)} expense(s)"
        )
        return state


def _parse_trip_name(value) -> str:
    if isinstance(value, str):
        return value
    if value is not None:
        logger.warning(f"Ignoring invalid tripName {value!r}")
    return defaults.default_trip_name()


def _parse_budget(value) -> Decimal:
    # bool is an int subclass but never a budget
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        budget = parse_amount(value)
        if budget is not None:
            return budget
    if value is not None:
        logger.warning(f"Ignoring invalid budget {value!r}")
    return defaults.default_budget()


def _parse_categories(value) -> Tuple[Category, ...]:
    if not isinstance(value, list):
        if value is not None:
            logger.warning("Ignoring categories: not a list")
        return defaults.default_categories()

    categories: List[Category] = []
    seen = set()
    for item in value:
        try:
            record = CategoryRecord.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Skipping malformed category {item!r}: {e.error_count()} error(s)")
            continue
        if record.key in seen:
            logger.warning(f"Skipping duplicate category key '{record.key}'")
            continue
        seen.add(record.key)
        categories.append(
            Category(key=record.key, label=record.label, color=record.color)
        )

    if not categories:
        return defaults.default_categories()
    return tuple(categories)


def _parse_expenses(value) -> Tuple[Expense, ...]:
    if not isinstance(value, list):
        if value is not None:
            logger.warning("Ignoring expenses: not a list")
        return ()

    expenses: List[Expense] = []
    for item in value:
        try:
            record = ExpenseRecord.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Skipping malformed expense {item!r}: {e.error_count()} error(s)")
            continue
        expenses.append(
            Expense(
                id=record.id,
                name=record.name,
                amount=Decimal(str(record.amount)),
                category=record.category,
                date=record.date,
            )
        )
    return tuple(expenses)


def snapshot_for(state: TrackerState) -> str:
    """Render the JSON snapshot a state is saved as."""
    payload = {"version": SNAPSHOT_VERSION, **state.to_dict()}
    return json.dumps(payload, ensure_ascii=False, allow_nan=False)
