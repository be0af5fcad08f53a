from .bmi import router as bmi_router
