from .meal_plans import router as meal_plans_router
