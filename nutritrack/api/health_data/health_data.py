from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List
from nutritrack.core.database import get_db
from nutritrack.core.config import settings
from nutritrack.schemas.health_data import HealthData, HealthDataDay, HealthDataUpdate, HealthStats
from nutritrack.services.health_data_service import HealthDataService
from nutritrack.middleware.rate_limit import limiter

router = APIRouter()

@router.get("/today", response_model=HealthData)
@limiter.limit(settings.HEALTH_DATA_RATE_LIMIT)
async def get_today(
    request: Request,
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db)
):
    health_data_service = HealthDataService(db)
    return health_data_service.get_today(user_id)

@router.post("/update", response_model=HealthData)
@limiter.limit(settings.HEALTH_DATA_RATE_LIMIT)
async def update_today(
    health_update: HealthDataUpdate,
    request: Request,
    db: Session = Depends(get_db)
):
    health_data_service = HealthDataService(db)
    updates = health_update.model_dump(exclude_unset=True, exclude={"user_id"})
    return health_data_service.update_today(health_update.user_id, updates)

@router.get("/weekly", response_model=List[HealthDataDay])
@limiter.limit(settings.HEALTH_DATA_RATE_LIMIT)
async def get_weekly(
    request: Request,
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db)
):
    health_data_service = HealthDataService(db)
    return health_data_service.get_weekly(user_id)

@router.get("/stats", response_model=HealthStats)
@limiter.limit(settings.HEALTH_DATA_RATE_LIMIT)
async def get_stats(
    request: Request,
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db)
):
    health_data_service = HealthDataService(db)
    return health_data_service.get_stats(user_id)
