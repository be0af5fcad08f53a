"""
Nutrition aggregation over saved or tracked meal records.

Meal records have been written under several field names over time
("calories" vs "Calories (kcal)", "fats" vs "Fat (g)" vs "fat"). Each
canonical macro is read through an ordered alias list; the first truthy
numeric value wins and anything missing counts as zero.
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

MACRO_ALIASES: Dict[str, Tuple[str, ...]] = {
    "calories": ("calories", "Calories (kcal)"),
    "protein": ("protein", "Protein (g)"),
    "fat": ("fats", "Fat (g)", "fat"),
    "fiber": ("fiber", "Fiber (g)"),
    "carbs": ("carbs", "Carbs (g)"),
}

AGGREGATED_MACROS = ("calories", "protein", "fat", "fiber")

ADDED_AT_KEYS = ("addedAt", "added_at")
CREATED_AT_KEYS = ("createdAt", "created_at")

MEALS_PER_DAY_TARGET = 4
DAILY_STEP_GOAL = 10000
DAILY_WATER_GOAL = 8  # glasses
DAYS_PER_WEEK = 7

T = TypeVar("T")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def macro_value(record: Mapping[str, Any], macro: str) -> float:
    for key in MACRO_ALIASES[macro]:
        number = _as_number(record.get(key))
        if number:
            return number
    return 0.0


def _as_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        # Windows are local calendar days
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def effective_timestamp(record: Mapping[str, Any]) -> Optional[datetime]:
    for key in ADDED_AT_KEYS + CREATED_AT_KEYS:
        timestamp = _as_datetime(record.get(key))
        if timestamp is not None:
            return timestamp
    return None


def day_window(day: date) -> Tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def meals_in_window(
    records: Iterable[Mapping[str, Any]],
    window_start: datetime,
    window_end: datetime
) -> List[Mapping[str, Any]]:
    selected = []
    for record in records:
        timestamp = effective_timestamp(record)
        if timestamp is not None and window_start <= timestamp <= window_end:
            selected.append(record)
    return selected


def aggregate(
    records: Iterable[Mapping[str, Any]],
    window_start: datetime,
    window_end: datetime
) -> Dict[str, float]:
    """Sum calories, protein, fat and fiber of the records inside the window (inclusive)."""
    totals = {macro: 0.0 for macro in AGGREGATED_MACROS}
    for record in meals_in_window(records, window_start, window_end):
        for macro in AGGREGATED_MACROS:
            totals[macro] += macro_value(record, macro)
    return totals


def meal_consistency(meal_count: int) -> int:
    return min(100, round_half_up(meal_count / MEALS_PER_DAY_TARGET * 100))


def daily_summary(records: Sequence[Mapping[str, Any]], day: date) -> Dict[str, float]:
    """Nutrition totals plus meal consistency for one calendar day."""
    window_start, window_end = day_window(day)
    summary = aggregate(records, window_start, window_end)
    summary["meal_consistency"] = meal_consistency(len(meals_in_window(records, window_start, window_end)))
    return summary


def week_days(today: date) -> List[date]:
    return [today - timedelta(days=offset) for offset in range(DAYS_PER_WEEK - 1, -1, -1)]


def fill_week(by_day: Mapping[date, T], today: date, placeholder: Callable[[date], T]) -> List[T]:
    """Exactly seven points, oldest first, ending today; gaps become placeholders."""
    return [by_day[day] if day in by_day else placeholder(day) for day in week_days(today)]


def weekly_stats(series: Sequence[Mapping[str, Any]]) -> Dict[str, int]:
    days = len(series) or DAYS_PER_WEEK

    avg_steps = sum(_as_number(day.get("steps")) for day in series) / days
    avg_consistency = sum(_as_number(day.get("meal_consistency")) for day in series) / days
    avg_water = sum(_as_number(day.get("water")) for day in series) / days
    exercise_days = sum(1 for day in series if _as_number(day.get("exercise")) > 0)

    return {
        "weekly_goal_completion": min(100, round_half_up(avg_steps / DAILY_STEP_GOAL * 100)),
        "meal_consistency": round_half_up(avg_consistency),
        "hydration_rate": min(100, round_half_up(avg_water / DAILY_WATER_GOAL * 100)),
        "exercise_days": round_half_up(exercise_days / DAYS_PER_WEEK * 100),
    }
