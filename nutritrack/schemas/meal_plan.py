from pydantic import Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from nutritrack.schemas.base import CamelModel

class PlanRequest(CamelModel):
    bmi: float = Field(..., gt=0)
    age: float = Field(..., ge=0)
    user_id: str = Field(..., min_length=1)

class CatalogMeal(CamelModel):
    id: Optional[str] = None
    dish: str
    meal_type: str
    age_group: Optional[str] = None
    bmi_category: Optional[str] = None
    calories: float = 0
    protein: float = 0
    fat: float = 0
    fiber: float = 0
    carbs: float = 0
    rating: Optional[float] = None
    ingredients: List[str] = []
    serving_size: Optional[str] = None
    notes: Optional[str] = None

class PlanResponse(CamelModel):
    plan: Dict[str, List[CatalogMeal]]

class UserRequest(CamelModel):
    user_id: str = Field(..., min_length=1)

class SaveMealRequest(UserRequest):
    meal: Dict[str, Any]

class RateMealRequest(UserRequest):
    rating: int = Field(..., ge=1, le=5)

class SavedMeal(CamelModel):
    id: str
    name: str
    category: str
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    fiber: float = 0
    ingredients: Optional[str] = ""
    notes: Optional[str] = ""
    is_favorite: bool = False
    added_by_user: bool = False
    image: Optional[str] = None
    rating: int = 3
    added_at: datetime

class RotationEntry(CamelModel):
    category: str
    last_index: int
    used_meal_ids: List[str] = []

class MealPlan(CamelModel):
    id: str
    user_id: str
    meals: List[SavedMeal] = []
    rotation_state: List[RotationEntry] = []
    last_reset_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class SavedMealsResponse(CamelModel):
    meals: List[SavedMeal]

class SavedMealActionResponse(CamelModel):
    message: str
    meal: SavedMeal
