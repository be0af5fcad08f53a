from .health_data import router as health_data_router
