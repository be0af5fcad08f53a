from pydantic import Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime
from nutritrack.schemas.base import CamelModel

MealType = Literal["breakfast", "lunch", "dinner", "snack", "meal"]

class TrackedMealCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    fats: float = Field(..., ge=0)
    fiber: float = Field(..., ge=0)
    carbs: float = Field(0, ge=0)
    meal_type: MealType = "meal"
    added_at: Optional[datetime] = None

    @field_validator('added_at')
    @classmethod
    def to_local_time(cls, v):
        # Day windows are local and naive
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

class TrackedMeal(CamelModel):
    id: str
    user_id: str
    name: str
    calories: float
    protein: float
    fats: float
    fiber: float
    carbs: float = 0
    meal_type: str
    added_at: datetime
    created_at: Optional[datetime] = None

class TrackedMealListResponse(CamelModel):
    success: bool = True
    meals: List[TrackedMeal]
    count: int

class TrackedMealCreatedResponse(CamelModel):
    success: bool = True
    meal: TrackedMeal
    message: str = "Meal tracked successfully"
