from .tracked_meals import router as tracked_meals_router
