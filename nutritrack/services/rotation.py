"""
Round-robin rotation state for meal plan suggestions.

Each meal plan keeps one RotationEntry per category holding the index of the
last candidate served. The candidate list is rebuilt on every request (saved
meals drop out of it), so the pointer is always taken modulo the current list
length.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple, TypeVar

from nutritrack.models.meal_plan import MealPlan, RotationEntry

logger = logging.getLogger(__name__)

CATEGORIES = ("Breakfast", "Lunch", "Snack", "Dinner")
MEALS_PER_CATEGORY = 2

T = TypeVar("T")


def most_recent_monday(day: date) -> date:
    return day - timedelta(days=day.weekday())


def is_weekly_reset_due(last_reset: Optional[datetime], now: datetime) -> bool:
    """
    True once per Monday boundary.

    Due when no reset has happened yet, when today is Monday and the last reset
    was on another day, or when the last reset predates the most recent Monday.
    """
    if last_reset is None:
        return True

    today = now.date()
    last_reset_day = last_reset.date()

    if today.weekday() == 0 and last_reset_day != today:
        return True

    return last_reset_day < most_recent_monday(today)


def start_index(last_index: int, candidate_count: int) -> int:
    return (last_index + 1) % candidate_count


def pick_round(candidates: Sequence[T], start: int, limit: int = MEALS_PER_CATEGORY) -> Tuple[List[T], int]:
    """
    Walk forward circularly from ``start`` collecting up to ``limit`` items.

    At most ``len(candidates)`` steps are taken, so a single candidate is never
    returned twice. Returns the picks and the index the next round starts at.
    """
    picks: List[T] = []
    index = start
    attempts = 0
    while len(picks) < limit and attempts < len(candidates):
        picks.append(candidates[index])
        index = (index + 1) % len(candidates)
        attempts += 1
    return picks, index


class RotationTracker:
    """Reads and advances the rotation state stored on a MealPlan."""

    def __init__(self, meal_plan: MealPlan):
        self.meal_plan = meal_plan

    def ensure_entries(self) -> None:
        for category in CATEGORIES:
            if self.meal_plan.rotation_entry(category) is None:
                self.meal_plan.rotation_state.append(
                    RotationEntry(category=category, last_index=-1, used_meal_ids=[])
                )

    def entry(self, category: str) -> RotationEntry:
        entry = self.meal_plan.rotation_entry(category)
        if entry is None:
            entry = RotationEntry(category=category, last_index=-1, used_meal_ids=[])
            self.meal_plan.rotation_state.append(entry)
        return entry

    def reset_if_due(self, now: datetime) -> bool:
        if not is_weekly_reset_due(self.meal_plan.last_reset_date, now):
            return False

        logger.info(f"Weekly rotation reset for user {self.meal_plan.user_id}")
        for entry in self.meal_plan.rotation_state:
            entry.last_index = -1
        self.meal_plan.last_reset_date = now
        return True

    def advance(self, category: str, candidate_count: int) -> int:
        return start_index(self.entry(category).last_index, candidate_count)

    def record(self, category: str, next_start: int, candidate_count: int) -> None:
        self.entry(category).last_index = (next_start - 1) % candidate_count

    def manual_reset(self) -> None:
        for category in CATEGORIES:
            entry = self.meal_plan.rotation_entry(category)
            if entry is not None:
                entry.last_index = -1
                entry.used_meal_ids = []
