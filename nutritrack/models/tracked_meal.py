from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, Index
from nutritrack.core.database import Base
from nutritrack.utils.id_utils import generate_id

class TrackedMeal(Base):
    __tablename__ = "tracked_meals"
    __table_args__ = (
        Index('ix_tracked_meals_user_added_at', 'user_id', 'added_at'),
    )

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, default="Unnamed Meal")
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    fats = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    meal_type = Column(String, nullable=False, default="meal")
    added_at = Column(DateTime, nullable=False, default=datetime.now)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
