from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from nutritrack.models.tracked_meal import TrackedMeal
from nutritrack.schemas.tracked_meal import TrackedMealCreate
from nutritrack.services.nutrition import day_window

class TrackedMealService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_meals(self, user_id: str, day: Optional[date] = None) -> List[TrackedMeal]:
        query = self.db.query(TrackedMeal).filter(TrackedMeal.user_id == user_id)

        if day:
            window_start, window_end = day_window(day)
            query = query.filter(
                TrackedMeal.added_at >= window_start,
                TrackedMeal.added_at <= window_end
            )

        return query.order_by(TrackedMeal.added_at.desc()).all()

    def get_weekly_meals(self, user_id: str, now: Optional[datetime] = None) -> List[TrackedMeal]:
        """Meals tracked during the last seven days."""
        end = now or datetime.now()
        start = end - timedelta(days=7)
        return self.db.query(TrackedMeal).filter(
            TrackedMeal.user_id == user_id,
            TrackedMeal.added_at >= start,
            TrackedMeal.added_at <= end
        ).order_by(TrackedMeal.added_at.desc()).all()

    def create_meal(self, meal_data: TrackedMealCreate, now: Optional[datetime] = None) -> TrackedMeal:
        now = now or datetime.now()
        meal_dict = meal_data.model_dump(exclude={'added_at'})
        meal = TrackedMeal(
            **meal_dict,
            added_at=meal_data.added_at or now,
            created_at=now
        )

        self.db.add(meal)
        self.db.commit()
        self.db.refresh(meal)
        return meal

    def delete_meal(self, meal_id: str) -> bool:
        meal = self.db.query(TrackedMeal).filter(TrackedMeal.id == meal_id).first()
        if not meal:
            return False

        self.db.delete(meal)
        self.db.commit()
        return True
