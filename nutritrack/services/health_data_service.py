import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nutritrack.models.health_data import HealthData
from nutritrack.models.meal_plan import MealPlan
from nutritrack.services.nutrition import daily_summary, fill_week, week_days, weekly_stats

logger = logging.getLogger(__name__)

ACTIVITY_FIELDS = ("steps", "water", "sleep", "exercise", "weight")


def _snapshot(record: HealthData) -> Dict[str, Any]:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "date": record.date,
        "steps": record.steps,
        "water": record.water,
        "sleep": record.sleep,
        "exercise": record.exercise,
        "weight": record.weight,
        "calories": record.calories,
        "protein": record.protein,
        "fat": record.fat,
        "fiber": record.fiber,
        "meal_consistency": record.meal_consistency,
    }


def _empty_day(user_id: str, day: date) -> Dict[str, Any]:
    return {
        "id": None,
        "user_id": user_id,
        "date": day,
        "steps": 0,
        "water": 0,
        "sleep": 0,
        "exercise": 0,
        "weight": None,
        "calories": 0,
        "protein": 0,
        "fat": 0,
        "fiber": 0,
        "meal_consistency": 0,
    }


class HealthDataService:
    def __init__(self, db: Session):
        self.db = db

    def get_record(self, user_id: str, day: date) -> Optional[HealthData]:
        return self.db.query(HealthData).filter(
            HealthData.user_id == user_id,
            HealthData.date == day
        ).first()

    def get_or_create_record(self, user_id: str, day: date) -> HealthData:
        record = self.get_record(user_id, day)
        if record:
            return record

        fields = _empty_day(user_id, day)
        fields.pop("id")
        record = HealthData(**fields)
        try:
            # Only the savepoint is rolled back when another request inserted first
            with self.db.begin_nested():
                self.db.add(record)
        except IntegrityError:
            logger.info(f"Health record for {user_id} on {day} created concurrently, reloading")
            record = self.get_record(user_id, day)
        return record

    def _refresh_nutrition(self, record: HealthData, user_id: str, day: date) -> None:
        meal_plan = self.db.query(MealPlan).filter(MealPlan.user_id == user_id).first()
        if not meal_plan or not meal_plan.meals:
            return

        summary = daily_summary([meal.as_record() for meal in meal_plan.meals], day)
        record.calories = summary["calories"]
        record.protein = summary["protein"]
        record.fat = summary["fat"]
        record.fiber = summary["fiber"]
        record.meal_consistency = summary["meal_consistency"]

    def get_today(self, user_id: str, now: Optional[datetime] = None) -> HealthData:
        """Today's record with nutrition recomputed from the meals saved today."""
        today = (now or datetime.now()).date()
        record = self.get_or_create_record(user_id, today)
        self._refresh_nutrition(record, user_id, today)

        self.db.commit()
        self.db.refresh(record)
        return record

    def update_today(self, user_id: str, updates: Dict[str, Any], now: Optional[datetime] = None) -> HealthData:
        today = (now or datetime.now()).date()
        record = self.get_or_create_record(user_id, today)

        for field in ACTIVITY_FIELDS:
            if field not in updates:
                continue
            # Only weight may be cleared
            if updates[field] is None and field != "weight":
                continue
            setattr(record, field, updates[field])
        self._refresh_nutrition(record, user_id, today)

        self.db.commit()
        self.db.refresh(record)
        return record

    def get_weekly(self, user_id: str, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Seven daily snapshots ending today; days without a record are zero-filled."""
        today = (now or datetime.now()).date()
        days = week_days(today)

        records = self.db.query(HealthData).filter(
            HealthData.user_id == user_id,
            HealthData.date >= days[0],
            HealthData.date <= today
        ).all()

        by_day = {record.date: _snapshot(record) for record in records}
        return fill_week(by_day, today, lambda day: _empty_day(user_id, day))

    def get_stats(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, int]:
        return weekly_stats(self.get_weekly(user_id, now))
