from .base import CamelModel, MessageResponse
from .meal_plan import (
    PlanRequest, PlanResponse, CatalogMeal, UserRequest, SaveMealRequest, RateMealRequest,
    SavedMeal, RotationEntry, MealPlan, SavedMealsResponse, SavedMealActionResponse
)
from .health_data import HealthData, HealthDataDay, HealthDataUpdate, HealthStats
from .tracked_meal import TrackedMeal, TrackedMealCreate, TrackedMealListResponse, TrackedMealCreatedResponse
from .bmi import BMIRequest, BMIResponse

__all__ = [
    "CamelModel", "MessageResponse",
    "PlanRequest", "PlanResponse", "CatalogMeal", "UserRequest", "SaveMealRequest", "RateMealRequest",
    "SavedMeal", "RotationEntry", "MealPlan", "SavedMealsResponse", "SavedMealActionResponse",
    "HealthData", "HealthDataDay", "HealthDataUpdate", "HealthStats",
    "TrackedMeal", "TrackedMealCreate", "TrackedMealListResponse", "TrackedMealCreatedResponse",
    "BMIRequest", "BMIResponse"
]
