from nutritrack.core.database import Base
from .meal_plan import MealPlan, SavedMeal, RotationEntry
from .health_data import HealthData
from .tracked_meal import TrackedMeal

__all__ = ["Base", "MealPlan", "SavedMeal", "RotationEntry", "HealthData", "TrackedMeal"]
