from sqlalchemy import Column, String, Date, DateTime, Integer, Float, UniqueConstraint
from sqlalchemy.sql import func
from nutritrack.core.database import Base
from nutritrack.utils.id_utils import generate_id

class HealthData(Base):
    __tablename__ = "health_data"
    __table_args__ = (
        # Only one entry per user per calendar day
        UniqueConstraint('user_id', 'date', name='uq_health_data_user_date'),
    )

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    steps = Column(Integer, nullable=False, default=0)
    water = Column(Float, nullable=False, default=0)  # glasses
    sleep = Column(Float, nullable=False, default=0)  # hours
    exercise = Column(Float, nullable=False, default=0)  # minutes
    weight = Column(Float, nullable=True)  # kg
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    meal_consistency = Column(Integer, nullable=False, default=0)  # percentage
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
