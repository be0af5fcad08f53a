from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from nutritrack.core.database import get_db
from nutritrack.core.config import settings
from nutritrack.api.deps import get_catalog
from nutritrack.schemas.base import MessageResponse
from nutritrack.schemas.meal_plan import (
    PlanRequest, PlanResponse, SaveMealRequest, UserRequest, RateMealRequest,
    MealPlan as MealPlanSchema, SavedMealsResponse, SavedMealActionResponse
)
from nutritrack.services.catalog import MealCatalog
from nutritrack.services.meal_plan_service import MealPlanService
from nutritrack.middleware.rate_limit import limiter

router = APIRouter()

@router.post("/plan", response_model=PlanResponse)
@limiter.limit(settings.PLAN_RATE_LIMIT)
async def generate_plan(
    plan_request: PlanRequest,
    request: Request,
    db: Session = Depends(get_db),
    catalog: MealCatalog = Depends(get_catalog)
):
    meal_plan_service = MealPlanService(db, catalog)
    plan = meal_plan_service.generate_plan(
        user_id=plan_request.user_id,
        age=plan_request.age,
        bmi=plan_request.bmi
    )
    return {"plan": plan}

@router.post("/save", response_model=MealPlanSchema, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def save_meal(
    save_request: SaveMealRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    try:
        return meal_plan_service.save_meal(save_request.user_id, save_request.meal)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

@router.post("/like/{meal_id}", response_model=SavedMealActionResponse)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def like_meal(
    meal_id: str,
    user_request: UserRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    meal_plan = meal_plan_service.get_meal_plan(user_request.user_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )

    meal = meal_plan_service.like_meal(meal_plan, meal_id)
    if not meal:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal not found in user's plan"
        )
    return {"message": "Meal liked", "meal": meal}

@router.post("/rate/{meal_id}", response_model=SavedMealActionResponse)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def rate_meal(
    meal_id: str,
    rate_request: RateMealRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    meal_plan = meal_plan_service.get_meal_plan(rate_request.user_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )

    meal = meal_plan_service.rate_meal(meal_plan, meal_id, rate_request.rating)
    if not meal:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal not found"
        )
    return {"message": "Meal rated successfully", "meal": meal}

@router.post("/reset-rotation", response_model=MessageResponse)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def reset_rotation(
    user_request: UserRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    meal_plan = meal_plan_service.get_meal_plan(user_request.user_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )

    meal_plan_service.reset_rotation(meal_plan)
    return {"message": "Rotation reset successfully"}

@router.get("/saved/{user_id}", response_model=SavedMealsResponse)
async def get_saved_meals(
    user_id: str,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    meal_plan = meal_plan_service.get_meal_plan(user_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No saved meals found"
        )
    return {"meals": meal_plan.meals}

@router.delete("/remove/{meal_id}/{user_id}", response_model=MessageResponse)
@limiter.limit(settings.MEAL_RATE_LIMIT)
async def remove_meal(
    meal_id: str,
    user_id: str,
    request: Request,
    db: Session = Depends(get_db)
):
    meal_plan_service = MealPlanService(db)
    meal_plan = meal_plan_service.get_meal_plan(user_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )

    success = meal_plan_service.remove_meal(meal_plan, meal_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal not found or already removed"
        )
    return {"message": "Meal removed successfully"}
