"""Category model for grouping trip expenses."""

import re
from dataclasses import dataclass

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(label: str) -> str:
    """Derive a category key from a label.

    Lower-cases the label and collapses every run of non-alphanumeric
    characters into a single hyphen, e.g. "Brunch & Mimosas" -> "brunch-mimosas".
    """
    return _NON_ALNUM_RUN.sub("-", label.lower())


@dataclass(frozen=True)
class Category:
    """Represents a spending bucket.

    Attributes:
        key: Unique identifier derived from the label (see slugify).
        label: Display name.
        color: Hex color used by the breakdown chart.
    """

    key: str
    label: str
    color: str

    def to_dict(self) -> dict:
        """Convert category to dictionary for the persisted snapshot."""
        return {
            "key": self.key,
            "label": self.label,
            "color": self.color,
        }


@dataclass
class CategoryDraft:
    """Pending input of the add-category form."""

    label: str = ""
    color: str = ""
