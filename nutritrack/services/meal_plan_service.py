from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from nutritrack.models.meal_plan import MealPlan, RotationEntry, SavedMeal
from nutritrack.services.catalog import DEFAULT_RATING, MealCatalog, MealCatalogEntry, filter_for_profile, first_present
from nutritrack.services.nutrition import macro_value
from nutritrack.services.rotation import CATEGORIES, RotationTracker, pick_round
from nutritrack.utils.event_logger import meal_event_logger
from nutritrack.utils.id_utils import generate_id

DEFAULT_MEAL_NAME = "Unnamed Meal"
DEFAULT_CATEGORY = "General"
DEFAULT_IMAGE = "/images/default.jpg"
MIN_RATING = 1
MAX_RATING = 5


def validate_rating(value: Any) -> int:
    """Return the rating as an int, or raise ValueError unless it is a whole number in 1..5."""
    if isinstance(value, bool):
        raise ValueError("Rating must be a whole number between 1 and 5")
    try:
        number = float(value)
        rating = int(number)
    except (TypeError, ValueError, OverflowError):
        raise ValueError("Rating must be a whole number between 1 and 5")
    if number != rating:
        raise ValueError("Rating must be a whole number between 1 and 5")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValueError("Rating must be between 1 and 5")
    return rating


def _label(meal: Dict[str, Any], field: str, *keys: str) -> Optional[str]:
    """A single text value read through its aliases; structured values are rejected."""
    value = first_present(meal, *keys)
    if value is None:
        return None
    if isinstance(value, (dict, list, tuple, set)):
        raise ValueError(f"Meal {field} must be a string")
    return str(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


class MealPlanService:
    def __init__(self, db: Session, catalog: Optional[MealCatalog] = None):
        self.db = db
        self.catalog = catalog if catalog is not None else MealCatalog()

    def get_meal_plan(self, user_id: str) -> Optional[MealPlan]:
        return self.db.query(MealPlan).filter(MealPlan.user_id == user_id).first()

    def get_or_create_meal_plan(self, user_id: str, now: Optional[datetime] = None) -> MealPlan:
        meal_plan = self.get_meal_plan(user_id)
        if meal_plan:
            return meal_plan

        meal_plan = MealPlan(
            user_id=user_id,
            last_reset_date=now or datetime.now(),
            rotation_state=[
                RotationEntry(category=category, last_index=-1, used_meal_ids=[])
                for category in CATEGORIES
            ]
        )
        self.db.add(meal_plan)
        self.db.flush()
        return meal_plan

    def generate_plan(
        self,
        user_id: str,
        age: float,
        bmi: float,
        now: Optional[datetime] = None
    ) -> Dict[str, List[MealCatalogEntry]]:
        """
        Suggest up to two catalog meals per category for the user.

        Candidates already saved by the user (matched by id, never by name)
        are skipped. Each category continues from where the previous call
        stopped, and the rotation starts over once a week on Monday.
        """
        now = now or datetime.now()
        meal_plan = self.get_or_create_meal_plan(user_id, now)

        tracker = RotationTracker(meal_plan)
        tracker.ensure_entries()
        if tracker.reset_if_due(now):
            meal_event_logger.log_rotation_reset(user_id, "weekly")

        saved_ids = {meal.id for meal in meal_plan.meals}

        plan: Dict[str, List[MealCatalogEntry]] = {}
        for category in CATEGORIES:
            candidates = [
                entry for entry in filter_for_profile(self.catalog, age, bmi, category)
                if not (entry.id and entry.id in saved_ids)
            ]
            if not candidates:
                plan[category] = []
                continue

            start = tracker.advance(category, len(candidates))
            picks, next_start = pick_round(candidates, start)
            plan[category] = picks
            tracker.record(category, next_start, len(candidates))

        self.db.commit()
        meal_event_logger.log_plan_generated(user_id, plan)
        return plan

    def save_meal(self, user_id: str, meal: Dict[str, Any], now: Optional[datetime] = None) -> MealPlan:
        """
        Append a meal to the user's plan, creating the plan if needed.

        Accepts plan suggestions as well as hand-entered meals, so names and
        macros are read through their known aliases. Raises ValueError for an
        invalid rating or a non-text name, category, image or id before
        anything is written.
        """
        now = now or datetime.now()
        rating = validate_rating(meal.get("rating") or DEFAULT_RATING)
        meal_id = _label(meal, "id", "_id", "id") or generate_id()
        name = _label(meal, "name", "name", "dish", "Dish") or DEFAULT_MEAL_NAME
        category = _label(meal, "category", "category", "mealType", "Meal Type") or DEFAULT_CATEGORY
        image = _label(meal, "image", "image") or DEFAULT_IMAGE

        meal_plan = self.get_or_create_meal_plan(user_id, now)

        if meal_plan.find_meal(meal_id) is not None:
            meal_id = generate_id()

        saved_meal = SavedMeal(
            id=meal_id,
            position=max((m.position for m in meal_plan.meals), default=-1) + 1,
            name=name,
            category=category,
            calories=macro_value(meal, "calories"),
            protein=macro_value(meal, "protein"),
            carbs=macro_value(meal, "carbs"),
            fats=macro_value(meal, "fat"),
            fiber=macro_value(meal, "fiber"),
            ingredients=_text(first_present(meal, "ingredients", "Ingredients")),
            notes=_text(first_present(meal, "notes", "Notes")),
            is_favorite=bool(first_present(meal, "isFavorite", "is_favorite")),
            added_by_user=bool(first_present(meal, "addedByUser", "added_by_user")),
            image=image,
            rating=rating,
            added_at=now,
        )
        meal_plan.meals.append(saved_meal)

        self.db.commit()
        self.db.refresh(meal_plan)
        meal_event_logger.log_meal_saved(user_id, saved_meal.id, saved_meal.category)
        return meal_plan

    def like_meal(self, meal_plan: MealPlan, meal_id: str) -> Optional[SavedMeal]:
        meal = meal_plan.find_meal(meal_id)
        if not meal:
            return None

        meal.is_favorite = True
        self.db.commit()
        self.db.refresh(meal)
        return meal

    def rate_meal(self, meal_plan: MealPlan, meal_id: str, rating: int) -> Optional[SavedMeal]:
        rating = validate_rating(rating)
        meal = meal_plan.find_meal(meal_id)
        if not meal:
            return None

        meal.rating = rating
        self.db.commit()
        self.db.refresh(meal)
        return meal

    def reset_rotation(self, meal_plan: MealPlan) -> MealPlan:
        RotationTracker(meal_plan).manual_reset()
        self.db.commit()
        meal_event_logger.log_rotation_reset(meal_plan.user_id, "manual")
        return meal_plan

    def remove_meal(self, meal_plan: MealPlan, meal_id: str) -> bool:
        matches = [meal for meal in meal_plan.meals if meal.id == str(meal_id)]
        if not matches:
            return False

        for meal in matches:
            meal_plan.meals.remove(meal)
        self.db.commit()
        meal_event_logger.log_meal_removed(meal_plan.user_id, str(meal_id))
        return True
