from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Float, Boolean, Text, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from nutritrack.core.database import Base
from nutritrack.utils.id_utils import generate_id

class MealPlan(Base):
    __tablename__ = "meal_plans"

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, unique=True, nullable=False, index=True)
    last_reset_date = Column(DateTime)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    meals = relationship(
        "SavedMeal",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by="SavedMeal.position"
    )
    rotation_state = relationship(
        "RotationEntry",
        back_populates="meal_plan",
        cascade="all, delete-orphan"
    )

    def find_meal(self, meal_id: str):
        return next((meal for meal in self.meals if meal.id == str(meal_id)), None)

    def rotation_entry(self, category: str):
        return next((entry for entry in self.rotation_state if entry.category == category), None)

class SavedMeal(Base):
    __tablename__ = "saved_meals"

    # Meal ids are only unique within one plan: two users may save the same catalog meal
    meal_plan_id = Column(String, ForeignKey('meal_plans.id', ondelete='CASCADE'), primary_key=True)
    id = Column(String, primary_key=True, default=generate_id)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False, default="Unnamed Meal")
    category = Column(String, nullable=False, default="General")
    calories = Column(Float, default=0)
    protein = Column(Float, default=0)
    carbs = Column(Float, default=0)
    fats = Column(Float, default=0)
    fiber = Column(Float, default=0)
    ingredients = Column(Text, default="")
    notes = Column(Text, default="")
    is_favorite = Column(Boolean, default=False, nullable=False)
    added_by_user = Column(Boolean, default=False, nullable=False)
    image = Column(String, default="/images/default.jpg")
    rating = Column(Integer, default=3, nullable=False)
    added_at = Column(DateTime, default=datetime.now, nullable=False)

    meal_plan = relationship("MealPlan", back_populates="meals")

    def as_record(self) -> dict:
        """Plain mapping view consumed by the nutrition aggregator."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "fiber": self.fiber,
            "addedAt": self.added_at,
        }

class RotationEntry(Base):
    __tablename__ = "rotation_entries"
    __table_args__ = (
        UniqueConstraint('meal_plan_id', 'category', name='uq_rotation_plan_category'),
    )

    id = Column(String, primary_key=True, default=generate_id)
    meal_plan_id = Column(String, ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False, index=True)
    category = Column(String, nullable=False)
    last_index = Column(Integer, nullable=False, default=-1)
    # Populated for compatibility only; exclusion is driven by saved meal ids
    used_meal_ids = Column(JSON, nullable=False, default=list)

    meal_plan = relationship("MealPlan", back_populates="rotation_state")
