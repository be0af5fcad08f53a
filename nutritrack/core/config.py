from pathlib import Path
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "meals_catalog.json"


class Settings(BaseSettings):
    # Database Configuration - SQLite file by default, any SQLAlchemy URL works
    DATABASE_URL: str = "sqlite:///./nutritrack.db"

    # Static meal catalog, loaded once at process start
    MEAL_CATALOG_PATH: str = str(DEFAULT_CATALOG_PATH)

    # CORS Configuration
    ALLOWED_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Rate Limiting Configuration
    RATE_LIMIT_ENABLED: bool = True

    # Default rate limits (requests per minute)
    DEFAULT_RATE_LIMIT: str = "100/minute"

    # Endpoint rate limits
    PLAN_RATE_LIMIT: str = "30/minute"
    MEAL_RATE_LIMIT: str = "60/minute"
    HEALTH_DATA_RATE_LIMIT: str = "60/minute"

    # Request size limits (in bytes)
    MAX_REQUEST_SIZE: int = 1 * 1024 * 1024  # 1MB

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_MEAL_EVENTS: bool = True
    MEAL_EVENT_LOG_FILE: Optional[str] = None

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra environment variables

settings = Settings()
