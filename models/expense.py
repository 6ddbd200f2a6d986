from dataclasses import dataclass
from decimal import Decimal
from typing import Union

# Largest amount a single expense may have
MAX_AMOUNT = Decimal("1e15")


@dataclass(frozen=True)
class Expense:
    id: str  # opaque, generated on creation
    name: str
    amount: Decimal  # always positive
    category: str  # category key
    date: str  # ISO calendar date, e.g. "2025-03-14"

    def to_dict(self) -> dict:
        """Convert expense to dictionary for the persisted snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": float(self.amount),
            "category": self.category,
            "date": self.date,
        }


@dataclass
class ExpenseDraft:
    """Pending input of the add-expense form.

    The amount is kept as entered (string or number) and only parsed when
    the draft is submitted.
    """

    name: str = ""
    amount: Union[str, int, float, Decimal] = ""
    category: str = ""
    date: str = ""
