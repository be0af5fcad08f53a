import json
import tempfile
import unittest
from pathlib import Path

from nutritrack.core.config import DEFAULT_CATALOG_PATH
from nutritrack.services.catalog import (
    MealCatalog, MealCatalogEntry, filter_candidates, filter_for_profile,
    normalize_bmi_category, parse_age_range
)
from tests.support import build_catalog, catalog_row


class TestCatalogParsing(unittest.TestCase):
    def test_parse_age_range(self):
        self.assertEqual(parse_age_range("18-30"), (18, 30))
        self.assertEqual(parse_age_range("31 to 50 years"), (31, 50))
        self.assertIsNone(parse_age_range("adults"))
        self.assertIsNone(parse_age_range(None))

    def test_normalize_bmi_category_keeps_letters_only(self):
        self.assertEqual(normalize_bmi_category("Normal 🙂"), "normal")
        self.assertEqual(normalize_bmi_category(" Over-Weight "), "overweight")
        self.assertEqual(normalize_bmi_category(None), "")

    def test_entry_from_record_reads_column_names(self):
        entry = MealCatalogEntry.from_record(catalog_row("b-1", "Porridge", calories=250))
        self.assertEqual(entry.id, "b-1")
        self.assertEqual(entry.dish, "Porridge")
        self.assertEqual(entry.meal_type, "Breakfast")
        self.assertEqual(entry.calories, 250)
        self.assertEqual(entry.ingredients, ("oats", "milk"))
        self.assertEqual(entry.age_range, (18, 30))

    def test_missing_rating_counts_as_three(self):
        entry = MealCatalogEntry.from_record(catalog_row("b-1", "Porridge", rating=None))
        self.assertIsNone(entry.rating)
        self.assertEqual(entry.effective_rating, 3)


class TestFilterCandidates(unittest.TestCase):
    def setUp(self):
        self.catalog = build_catalog()

    def test_profile_match_sorted_by_rating(self):
        candidates = filter_candidates(self.catalog, 25, "normal", "Breakfast")
        self.assertEqual([entry.id for entry in candidates], ["x", "y", "z"])

    def test_meal_type_is_case_insensitive(self):
        candidates = filter_candidates(self.catalog, 25, "normal", "breakfast")
        self.assertEqual(len(candidates), 3)

    def test_falls_back_to_meal_type_when_profile_has_no_match(self):
        candidates = filter_candidates(self.catalog, 25, "normal", "Lunch")
        self.assertEqual([entry.id for entry in candidates], ["lunch-senior"])

    def test_unknown_meal_type_is_empty(self):
        self.assertEqual(filter_candidates(self.catalog, 25, "normal", "Dinner"), [])

    def test_entries_without_age_range_only_reach_fallback(self):
        catalog = build_catalog([
            catalog_row("a", "No Age", age_group="any", rating=5),
            catalog_row("b", "Aged", rating=1),
        ])
        candidates = filter_candidates(catalog, 25, "normal", "Breakfast")
        self.assertEqual([entry.id for entry in candidates], ["b"])

    def test_filter_for_profile_maps_bmi(self):
        catalog = build_catalog([
            catalog_row("lean", "Lean", bmi_category="Underweight"),
            catalog_row("heavy", "Heavy", bmi_category="Obese"),
        ])
        self.assertEqual([e.id for e in filter_for_profile(catalog, 25, 17.0, "Breakfast")], ["lean"])
        self.assertEqual([e.id for e in filter_for_profile(catalog, 25, 32.0, "Breakfast")], ["heavy"])


class TestCatalogLoading(unittest.TestCase):
    def test_missing_file_gives_empty_catalog(self):
        catalog = MealCatalog.load("/nonexistent/meals.json")
        self.assertEqual(len(catalog), 0)

    def test_non_array_file_gives_empty_catalog(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "catalog.json"
            path.write_text(json.dumps({"Dish": "not a list"}))
            self.assertEqual(len(MealCatalog.load(path)), 0)

    def test_packaged_catalog_covers_every_category(self):
        catalog = MealCatalog.load(DEFAULT_CATALOG_PATH)
        meal_types = {entry.meal_type for entry in catalog}
        self.assertTrue({"Breakfast", "Lunch", "Snack", "Dinner"} <= meal_types)


if __name__ == "__main__":
    unittest.main()
