from fastapi import APIRouter, Depends, HTTPException, Query, status, Request
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from nutritrack.core.database import get_db
from nutritrack.core.config import settings
from nutritrack.schemas.base import MessageResponse
from nutritrack.schemas.tracked_meal import TrackedMealCreate, TrackedMealListResponse, TrackedMealCreatedResponse
from nutritrack.services.tracked_meal_service import TrackedMealService
from nutritrack.middleware.rate_limit import limiter

router = APIRouter()

@router.post("", response_model=TrackedMealCreatedResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def track_meal(
    meal: TrackedMealCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    tracked_meal_service = TrackedMealService(db)
    return {"meal": tracked_meal_service.create_meal(meal)}

@router.get("/weekly/{user_id}", response_model=TrackedMealListResponse)
async def get_weekly_meals(
    user_id: str,
    db: Session = Depends(get_db)
):
    tracked_meal_service = TrackedMealService(db)
    meals = tracked_meal_service.get_weekly_meals(user_id)
    return {"meals": meals, "count": len(meals)}

@router.get("/{user_id}", response_model=TrackedMealListResponse)
async def get_user_meals(
    user_id: str,
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db)
):
    """Meals tracked by the user, newest first, optionally limited to one day."""
    tracked_meal_service = TrackedMealService(db)
    meals = tracked_meal_service.get_user_meals(user_id, day)
    return {"meals": meals, "count": len(meals)}

@router.delete("/{meal_id}", response_model=MessageResponse)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def delete_meal(
    meal_id: str,
    request: Request,
    db: Session = Depends(get_db)
):
    tracked_meal_service = TrackedMealService(db)
    success = tracked_meal_service.delete_meal(meal_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal not found"
        )
    return {"message": "Meal deleted successfully"}
