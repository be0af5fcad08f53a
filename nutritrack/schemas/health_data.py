from pydantic import Field
from typing import Optional
from datetime import date
from nutritrack.schemas.base import CamelModel

MAX_DAILY_STEPS = 200000
MAX_DAILY_WATER = 100
MAX_WEIGHT_KG = 1000

class HealthDataUpdate(CamelModel):
    user_id: str = Field(..., min_length=1)
    steps: Optional[int] = Field(None, ge=0, le=MAX_DAILY_STEPS)
    water: Optional[float] = Field(None, ge=0, le=MAX_DAILY_WATER)  # glasses
    sleep: Optional[float] = Field(None, ge=0, le=24)  # hours
    exercise: Optional[float] = Field(None, ge=0, le=24 * 60)  # minutes
    weight: Optional[float] = Field(None, gt=0, le=MAX_WEIGHT_KG)  # kg

class HealthDataDay(CamelModel):
    id: Optional[str] = None
    user_id: str
    date: date
    steps: int = 0
    water: float = 0
    sleep: float = 0
    exercise: float = 0
    weight: Optional[float] = None
    calories: float = 0
    protein: float = 0
    fat: float = 0
    fiber: float = 0
    meal_consistency: int = 0

class HealthData(HealthDataDay):
    id: str

class HealthStats(CamelModel):
    weekly_goal_completion: int
    meal_consistency: int
    hydration_rate: int
    exercise_days: int
