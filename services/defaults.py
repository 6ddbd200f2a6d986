"""Default trip data loaded from db/seed/defaults.yaml."""

import random
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from config import get_seed_dir
from logger import get_logger
from models.category import Category
from models.trip import TrackerState

logger = get_logger()


@lru_cache(maxsize=None)
def _load_seed(seed_file: Path) -> Dict[str, Any]:
    if not seed_file.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_file}")

    logger.debug(f"Loading defaults from {seed_file}")

    with open(seed_file, "r") as f:
        return yaml.safe_load(f)


def load_defaults(seed_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the raw defaults document.

    Args:
        seed_file: YAML file to read. Defaults to db/seed/defaults.yaml.

    Returns:
        Dictionary with trip_name, budget, categories and palette keys.

    Raises:
        FileNotFoundError: If the seed file doesn't exist.
        yaml.YAMLError: If YAML is invalid.
    """
    return _load_seed(seed_file or get_seed_dir() / "defaults.yaml")


def default_trip_name() -> str:
    return load_defaults()["trip_name"]


def default_budget() -> Decimal:
    return Decimal(str(load_defaults()["budget"]))


def default_categories() -> Tuple[Category, ...]:
    """The fixed set of categories every new trip starts with."""
    return tuple(
        Category(key=c["key"], label=c["label"], color=c["color"])
        for c in load_defaults()["categories"]
    )


def palette() -> List[str]:
    return list(load_defaults()["palette"])


def default_state() -> TrackerState:
    """Build the state of a brand new trip (no expenses)."""
    return TrackerState(
        trip_name=default_trip_name(),
        budget=default_budget(),
        categories=default_categories(),
        expenses=(),
    )


def random_category_color(rng: Optional[random.Random] = None) -> str:
    """Pick a color for a new category from the palette.

    Args:
        rng: Optional random source, mainly for tests.
    """
    return (rng or random).choice(palette())
