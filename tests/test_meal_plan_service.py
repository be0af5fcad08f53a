import unittest
from datetime import datetime

from nutritrack.services.meal_plan_service import MealPlanService, validate_rating
from nutritrack.services.catalog import MealCatalog
from tests.support import WEDNESDAY_NOON, build_catalog, catalog_row, create_test_sessionmaker


def ids(meals):
    return [meal.id for meal in meals]


class MealPlanServiceTestCase(unittest.TestCase):
    catalog_rows = None

    def setUp(self):
        self.engine, SessionLocal = create_test_sessionmaker()
        self.db = SessionLocal()
        catalog = build_catalog(self.catalog_rows) if self.catalog_rows else build_catalog()
        self.service = MealPlanService(self.db, catalog)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def last_index(self, user_id, category="Breakfast"):
        return self.service.get_meal_plan(user_id).rotation_entry(category).last_index


class TestPlanGeneration(MealPlanServiceTestCase):
    def test_first_plan_starts_at_top_rated(self):
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(list(plan), ["Breakfast", "Lunch", "Snack", "Dinner"])
        self.assertEqual(ids(plan["Breakfast"]), ["x", "y"])
        self.assertEqual(self.last_index("u1"), 1)

    def test_second_plan_continues_rotation(self):
        self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(ids(plan["Breakfast"]), ["z", "x"])
        self.assertEqual(self.last_index("u1"), 0)

    def test_saved_meal_leaves_candidate_pool(self):
        self.service.save_meal("u1", {"id": "y", "dish": "Meal Y", "mealType": "Breakfast"}, now=WEDNESDAY_NOON)
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(ids(plan["Breakfast"]), ["x", "z"])

    def test_fallback_and_empty_categories(self):
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(ids(plan["Lunch"]), ["lunch-senior"])
        self.assertEqual(plan["Snack"], [])
        self.assertEqual(plan["Dinner"], [])
        self.assertEqual(self.last_index("u1", "Snack"), -1)

    def test_new_plan_records_reset_date(self):
        self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        meal_plan = self.service.get_meal_plan("u1")
        self.assertEqual(meal_plan.last_reset_date, WEDNESDAY_NOON)
        self.assertEqual(len(meal_plan.rotation_state), 4)

    def test_weekly_reset_restarts_rotation(self):
        self.service.generate_plan("u1", age=25, bmi=22, now=datetime(2024, 5, 8, 12))
        self.assertEqual(self.last_index("u1"), 1)

        next_tuesday = datetime(2024, 5, 14, 9)
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=next_tuesday)
        self.assertEqual(ids(plan["Breakfast"]), ["x", "y"])
        self.assertEqual(self.service.get_meal_plan("u1").last_reset_date, next_tuesday)

        # Same week, no second reset
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=datetime(2024, 5, 16, 9))
        self.assertEqual(ids(plan["Breakfast"]), ["z", "x"])
        self.assertEqual(self.service.get_meal_plan("u1").last_reset_date, next_tuesday)

    def test_empty_catalog_yields_empty_plan(self):
        service = MealPlanService(self.db, MealCatalog())
        plan = service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(plan, {"Breakfast": [], "Lunch": [], "Snack": [], "Dinner": []})

    def test_manual_reset(self):
        self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.service.reset_rotation(self.service.get_meal_plan("u1"))
        self.assertEqual(self.last_index("u1"), -1)
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(ids(plan["Breakfast"]), ["x", "y"])


class TestRotationWithLargerPool(MealPlanServiceTestCase):
    catalog_rows = [catalog_row(meal_id, meal_id.upper(), rating=rating)
                    for meal_id, rating in (("a", 5), ("b", 4), ("c", 3), ("d", 2), ("e", 1))]

    def test_consecutive_plans_do_not_overlap(self):
        first = ids(self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)["Breakfast"])
        second = ids(self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)["Breakfast"])
        self.assertEqual(first, ["a", "b"])
        self.assertEqual(second, ["c", "d"])


class TestExclusionById(MealPlanServiceTestCase):
    catalog_rows = [
        catalog_row("s1", "Salad", rating=5),
        catalog_row("s2", "Salad", rating=4),
        catalog_row("s3", "Soup", rating=3),
    ]

    def test_same_name_different_id_stays_eligible(self):
        self.service.save_meal("u1", {"_id": "s1", "Dish": "Salad"}, now=WEDNESDAY_NOON)
        plan = self.service.generate_plan("u1", age=25, bmi=22, now=WEDNESDAY_NOON)
        self.assertEqual(ids(plan["Breakfast"]), ["s2", "s3"])


class TestSavedMeals(MealPlanServiceTestCase):
    def test_save_applies_defaults(self):
        meal_plan = self.service.save_meal("u1", {}, now=WEDNESDAY_NOON)
        meal = meal_plan.meals[0]
        self.assertEqual(meal.name, "Unnamed Meal")
        self.assertEqual(meal.category, "General")
        self.assertEqual(meal.rating, 3)
        self.assertEqual(meal.image, "/images/default.jpg")
        self.assertEqual(meal.added_at, WEDNESDAY_NOON)
        self.assertEqual(len(meal.id), 21)

    def test_save_reads_catalog_columns(self):
        meal_plan = self.service.save_meal("u1", {
            "_id": "b-001", "Dish": "Oatmeal", "Meal Type": "Breakfast",
            "Calories (kcal)": 320, "Fat (g)": 7, "Carbs (g)": 54,
            "Ingredients": ["oats", "berries"], "rating": 5
        }, now=WEDNESDAY_NOON)
        meal = meal_plan.meals[0]
        self.assertEqual((meal.id, meal.name, meal.category), ("b-001", "Oatmeal", "Breakfast"))
        self.assertEqual((meal.calories, meal.fats, meal.carbs), (320, 7, 54))
        self.assertEqual(meal.ingredients, "oats, berries")
        self.assertEqual(meal.rating, 5)

    def test_duplicate_id_gets_fresh_id(self):
        self.service.save_meal("u1", {"id": "y", "name": "Meal Y"}, now=WEDNESDAY_NOON)
        meal_plan = self.service.save_meal("u1", {"id": "y", "name": "Meal Y"}, now=WEDNESDAY_NOON)
        self.assertEqual(len(meal_plan.meals), 2)
        self.assertEqual(meal_plan.meals[0].id, "y")
        self.assertNotEqual(meal_plan.meals[1].id, "y")

    def test_invalid_rating_writes_nothing(self):
        with self.assertRaises(ValueError):
            self.service.save_meal("u1", {"name": "Meal", "rating": 6}, now=WEDNESDAY_NOON)
        self.assertIsNone(self.service.get_meal_plan("u1"))

    def test_structured_text_fields_are_rejected(self):
        for meal in ({"name": {"en": "Oats"}}, {"image": ["a"]}, {"category": ["Lunch"]}, {"id": {"x": 1}}):
            with self.subTest(meal=meal):
                with self.assertRaises(ValueError):
                    self.service.save_meal("u1", meal, now=WEDNESDAY_NOON)
        self.assertIsNone(self.service.get_meal_plan("u1"))

    def test_scalar_text_fields_are_stringified(self):
        meal = self.service.save_meal("u1", {"id": 7, "name": 42}, now=WEDNESDAY_NOON).meals[0]
        self.assertEqual((meal.id, meal.name), ("7", "42"))

    def test_like_rate_and_remove(self):
        meal_plan = self.service.save_meal("u1", {"id": "y", "name": "Meal Y"}, now=WEDNESDAY_NOON)

        self.assertTrue(self.service.like_meal(meal_plan, "y").is_favorite)
        self.assertEqual(self.service.rate_meal(meal_plan, "y", 4).rating, 4)
        self.assertIsNone(self.service.like_meal(meal_plan, "missing"))

        with self.assertRaises(ValueError):
            self.service.rate_meal(meal_plan, "y", 6)
        self.assertEqual(meal_plan.find_meal("y").rating, 4)

        self.assertTrue(self.service.remove_meal(meal_plan, "y"))
        self.assertFalse(self.service.remove_meal(meal_plan, "y"))
        self.assertEqual(self.service.get_meal_plan("u1").meals, [])


class TestValidateRating(unittest.TestCase):
    def test_accepts_whole_numbers_in_range(self):
        self.assertEqual(validate_rating(1), 1)
        self.assertEqual(validate_rating("5"), 5)
        self.assertEqual(validate_rating(4.0), 4)

    def test_rejects_everything_else(self):
        for value in (0, 6, 3.5, "abc", None, True, float("inf")):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    validate_rating(value)


if __name__ == "__main__":
    unittest.main()
