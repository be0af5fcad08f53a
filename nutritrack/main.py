import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from nutritrack.core.config import settings
from nutritrack.core.database import init_db
from nutritrack.core.errors import register_exception_handlers
from nutritrack.core.startup import perform_startup_validation
from nutritrack.services.catalog import MealCatalog
from nutritrack.api.meal_plans import meal_plans_router
from nutritrack.api.health_data import health_data_router
from nutritrack.api.tracked_meals import tracked_meals_router
from nutritrack.api.bmi import bmi_router
from nutritrack.middleware.security import SecurityHeadersMiddleware
from nutritrack.middleware.rate_limit import limiter, rate_limit_exceeded_handler, create_rate_limit_middleware
from nutritrack.middleware.request_limits import create_request_limit_middleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    perform_startup_validation()
    init_db()
    yield

app = FastAPI(
    title="NutriTrack API",
    description="Backend API for meal planning and daily health tracking",
    version="1.0.0",
    lifespan=lifespan
)

# The catalog is read once and never written
app.state.catalog = MealCatalog.load(settings.MEAL_CATALOG_PATH)
logger.info(f"Loaded {len(app.state.catalog)} catalog meals from {settings.MEAL_CATALOG_PATH}")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
register_exception_handlers(app)

# Add security headers middleware (should be added before CORS)
app.add_middleware(SecurityHeadersMiddleware)

# Add request size limiting middleware
app.add_middleware(create_request_limit_middleware())

# Add rate limiting middleware if enabled
rate_limit_middleware = create_rate_limit_middleware()
if rate_limit_middleware:
    app.add_middleware(rate_limit_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Requested-With"],
)

app.include_router(meal_plans_router, prefix="/api/meals", tags=["meals"])
app.include_router(health_data_router, prefix="/api/health-data", tags=["health-data"])
app.include_router(tracked_meals_router, prefix="/api/tracked-meals", tags=["tracked-meals"])
app.include_router(bmi_router, prefix="/api/bmi", tags=["bmi"])

@app.get("/")
async def root():
    return {"message": "NutriTrack API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
