from datetime import datetime
from typing import Any, Dict, Iterable

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from nutritrack.models import Base
from nutritrack.services.catalog import MealCatalog


def catalog_row(meal_id: str, dish: str, meal_type: str = "Breakfast", rating: Any = 3,
                age_group: str = "18-30", bmi_category: str = "Normal", calories: float = 300) -> Dict[str, Any]:
    return {
        "_id": meal_id,
        "Dish": dish,
        "Meal Type": meal_type,
        "Age Group": age_group,
        "BMI Category": bmi_category,
        "Calories (kcal)": calories,
        "Protein (g)": 10,
        "Fat (g)": 5,
        "Fiber (g)": 3,
        "Carbs (g)": 40,
        "rating": rating,
        "Ingredients": "oats, milk",
    }


# X, Y, Z are Breakfast meals for a 25 year old with a normal BMI
SCENARIO_ROWS = [
    catalog_row("y", "Meal Y", rating=3),
    catalog_row("x", "Meal X", rating=5),
    catalog_row("z", "Meal Z", rating=3),
    catalog_row("lunch-senior", "Senior Lunch", meal_type="Lunch", age_group="60-80", bmi_category="Obese"),
]


def build_catalog(rows: Iterable[Dict[str, Any]] = SCENARIO_ROWS) -> MealCatalog:
    return MealCatalog.from_records(rows)


def create_test_sessionmaker():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Wednesday
WEDNESDAY_NOON = datetime(2024, 5, 15, 12, 0, 0)


class ApiTestMixin:
    """Wires the FastAPI app to a throwaway database and the scenario catalog."""

    catalog_rows = SCENARIO_ROWS

    def setUp(self):
        from nutritrack.api.deps import get_catalog
        from nutritrack.core.database import get_db
        from nutritrack.main import app
        from nutritrack.middleware.rate_limit import limiter

        self.engine, self.SessionLocal = create_test_sessionmaker()
        catalog = build_catalog(self.catalog_rows)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        limiter.enabled = False
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_catalog] = lambda: catalog
        self.app = app
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        self.app.dependency_overrides.clear()
        self.engine.dispose()
