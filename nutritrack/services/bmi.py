"""BMI value and category helpers."""

UNDERWEIGHT_THRESHOLD = 18.5
NORMAL_THRESHOLD = 25
OVERWEIGHT_THRESHOLD = 30


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def catalog_category(bmi: float) -> str:
    """Lowercase category label used to match catalog entries."""
    if bmi < UNDERWEIGHT_THRESHOLD:
        return "underweight"
    if bmi < NORMAL_THRESHOLD:
        return "normal"
    if bmi < OVERWEIGHT_THRESHOLD:
        return "overweight"
    return "obese"


def display_category(bmi: float) -> str:
    return {
        "underweight": "Underweight",
        "normal": "Normal weight",
        "overweight": "Overweight",
        "obese": "Obese",
    }[catalog_category(bmi)]
