"""Roster category assignment by pick order."""

from enum import Enum
from typing import Dict

from src.draft_engine.config import ROSTER_CATEGORY_LIMITS


class RosterCategory(Enum):
    STARTER = "starter"
    BENCH = "bench"
    RESERVE = "reserve"
    OVERFLOW = "overflow"  # Never stored; the pick is rejected

    @classmethod
    def storable(cls) -> tuple:
        return (cls.STARTER, cls.BENCH, cls.RESERVE)


def bucket(current_roster_size: int) -> RosterCategory:
    """
    Category for the next player added to a roster of the given size.

    Sizes 0-4 -> starter, 5-8 -> bench, 9-14 -> reserve, 15+ -> overflow.
    """
    if current_roster_size < 0:
        raise ValueError(f"Roster size cannot be negative: {current_roster_size}")

    threshold = 0
    for category in RosterCategory.storable():
        threshold += ROSTER_CATEGORY_LIMITS[category.value]
        if current_roster_size < threshold:
            return category
    return RosterCategory.OVERFLOW


def category_limits() -> Dict[RosterCategory, int]:
    """Slot count per storable category."""
    return {
        category: ROSTER_CATEGORY_LIMITS[category.value]
        for category in RosterCategory.storable()
    }
