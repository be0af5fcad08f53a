import os

# Settings are read once on import, so these must be set before nutritrack is loaded
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_MEAL_EVENTS", "false")
