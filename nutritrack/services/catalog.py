"""
Static meal catalog and the profile filter used by plan generation.

The catalog is read once from a JSON file whose rows keep the column names of
the source spreadsheet ("Dish", "Meal Type", "Age Group", "BMI Category",
"Calories (kcal)", ...). Entries are immutable; filtering always returns a new
list.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from nutritrack.services.bmi import catalog_category

logger = logging.getLogger(__name__)

DEFAULT_RATING = 3

_AGE_RANGE_PATTERN = re.compile(r'(\d+)\D+(\d+)')
_NON_LETTERS = re.compile(r'[^a-zA-Z]')


def parse_age_range(age_group: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse an age group such as "18-30" or "31 to 50 years" into (min, max)."""
    if not age_group:
        return None
    match = _AGE_RANGE_PATTERN.search(str(age_group))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def normalize_bmi_category(label: Optional[str]) -> str:
    """Strip everything but letters and lowercase, so "Normal 🙂" matches "normal"."""
    if not label:
        return ""
    return _NON_LETTERS.sub("", str(label)).lower()


def _number(value: Any) -> float:
    try:
        return float(value) if value not in (None, "") else 0.0
    except (TypeError, ValueError):
        return 0.0


def first_present(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) not in (None, ""):
            return record[key]
    return None


def _ingredient_list(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(part).strip() for part in value if str(part).strip())


@dataclass(frozen=True)
class MealCatalogEntry:
    id: Optional[str]
    dish: str
    meal_type: str
    age_group: Optional[str] = None
    bmi_category: Optional[str] = None
    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    carbs: float = 0.0
    rating: Optional[float] = None
    ingredients: Tuple[str, ...] = field(default_factory=tuple)
    serving_size: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "MealCatalogEntry":
        identifier = first_present(record, "_id", "id")
        rating = first_present(record, "rating", "Rating")
        return cls(
            id=str(identifier) if identifier is not None else None,
            dish=first_present(record, "Dish", "dish", "name") or "Unnamed Meal",
            meal_type=first_present(record, "Meal Type", "mealType", "meal_type") or "",
            age_group=first_present(record, "Age Group", "ageGroup", "age_group"),
            bmi_category=first_present(record, "BMI Category", "bmiCategory", "bmi_category"),
            calories=_number(first_present(record, "Calories (kcal)", "calories")),
            protein=_number(first_present(record, "Protein (g)", "protein")),
            fat=_number(first_present(record, "Fat (g)", "fat", "fats")),
            fiber=_number(first_present(record, "Fiber (g)", "fiber")),
            carbs=_number(first_present(record, "Carbs (g)", "carbs")),
            rating=_number(rating) if rating is not None else None,
            ingredients=_ingredient_list(first_present(record, "Ingredients", "ingredients")),
            serving_size=first_present(record, "Serving Size", "servingSize", "serving_size"),
            notes=first_present(record, "Notes", "notes"),
        )

    @property
    def age_range(self) -> Optional[Tuple[int, int]]:
        return parse_age_range(self.age_group)

    @property
    def effective_rating(self) -> float:
        return self.rating or DEFAULT_RATING

    def matches_meal_type(self, meal_type: str) -> bool:
        return (self.meal_type or "").lower() == meal_type.lower()

    def matches_age(self, age: float) -> bool:
        age_range = self.age_range
        if age_range is None:
            return False
        return age_range[0] <= age <= age_range[1]


class MealCatalog:
    """Read-only, ordered collection of catalog entries."""

    def __init__(self, entries: Iterable[MealCatalogEntry] = ()):
        self._entries: Tuple[MealCatalogEntry, ...] = tuple(entries)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "MealCatalog":
        return cls(MealCatalogEntry.from_record(record) for record in records)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MealCatalog":
        """
        Load the catalog from a JSON array file.

        A missing or malformed file yields an empty catalog so that plan
        generation degrades to empty categories instead of failing.
        """
        try:
            records = json.loads(Path(path).read_text(encoding="utf-8"))
            if not isinstance(records, list):
                raise ValueError("catalog file must contain a JSON array")
            catalog = cls.from_records(records)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load meal catalog from {path}: {str(e)}")
            return cls()

        logger.info(f"Loaded {len(catalog)} meals from {path}")
        return catalog

    def __iter__(self) -> Iterator[MealCatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def filter_candidates(
    entries: Iterable[MealCatalogEntry],
    age: float,
    bmi_category_label: str,
    meal_type: str
) -> List[MealCatalogEntry]:
    """
    Narrow catalog entries to a user's profile for one meal type.

    Entries must match the age range, the normalized BMI category and the
    meal type. When nothing matches the profile, every entry of the meal type
    is used instead. The result is sorted by rating, highest first; the sort is
    stable so equally rated entries keep catalog order.
    """
    entries = list(entries)
    wanted_bmi = normalize_bmi_category(bmi_category_label)

    candidates = [
        entry for entry in entries
        if entry.matches_age(age)
        and normalize_bmi_category(entry.bmi_category) == wanted_bmi
        and entry.matches_meal_type(meal_type)
    ]

    if not candidates:
        candidates = [entry for entry in entries if entry.matches_meal_type(meal_type)]

    return sorted(candidates, key=lambda entry: entry.effective_rating, reverse=True)


def filter_for_profile(
    catalog: MealCatalog,
    age: float,
    bmi: float,
    meal_type: str
) -> List[MealCatalogEntry]:
    return filter_candidates(catalog, age, catalog_category(bmi), meal_type)
