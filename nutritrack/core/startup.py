"""
Startup checks for the NutriTrack backend.

Run on application startup, or standalone with
``python -m nutritrack.core.startup`` to check a deployment's environment.
"""

import json
import logging
import re
import sys
from pathlib import Path
from typing import List, Tuple
from nutritrack.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_PATTERN = re.compile(r'^\d+\s*/\s*(second|minute|hour|day)$')
REQUIRED_MEAL_TYPES = {"breakfast", "lunch", "snack", "dinner"}

class StartupValidationError(Exception):
    """Raised when startup validation fails"""
    pass

def validate_database_url() -> Tuple[bool, List[str]]:
    issues = []

    if not settings.DATABASE_URL:
        return False, ["DATABASE_URL is not set"]

    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        issues.append("in-memory SQLite database, data is lost on restart")
    elif settings.DATABASE_URL.startswith("sqlite:///"):
        db_dir = Path(settings.DATABASE_URL[len("sqlite:///"):]).parent
        if not db_dir.is_dir():
            issues.append(f"directory for SQLite database does not exist: {db_dir}")

    return len(issues) == 0, issues

def validate_cors_origins() -> Tuple[bool, List[str]]:
    if not settings.ALLOWED_ORIGINS:
        return False, ["ALLOWED_ORIGINS is not set"]

    if "*" in settings.ALLOWED_ORIGINS:
        return False, ["wildcard origin cannot be combined with credentialed CORS"]

    if all("localhost" in origin or "127.0.0.1" in origin for origin in settings.ALLOWED_ORIGINS):
        logger.warning("All CORS origins are local. Update ALLOWED_ORIGINS for production deployment.")

    return True, []

def validate_rate_limits() -> Tuple[bool, List[str]]:
    limits = {
        "DEFAULT_RATE_LIMIT": settings.DEFAULT_RATE_LIMIT,
        "PLAN_RATE_LIMIT": settings.PLAN_RATE_LIMIT,
        "MEAL_RATE_LIMIT": settings.MEAL_RATE_LIMIT,
        "HEALTH_DATA_RATE_LIMIT": settings.HEALTH_DATA_RATE_LIMIT,
    }
    issues = [
        f"{name} has unsupported format '{value}' (expected e.g. '60/minute')"
        for name, value in limits.items()
        if not RATE_LIMIT_PATTERN.match(value.strip())
    ]
    return len(issues) == 0, issues

def validate_meal_catalog() -> Tuple[bool, List[str]]:
    """
    The catalog must be a JSON array. Missing meal types are reported because
    plans for those categories will always be empty.
    """
    catalog_path = Path(settings.MEAL_CATALOG_PATH)
    if not catalog_path.is_file():
        return False, [f"MEAL_CATALOG_PATH does not exist: {catalog_path}"]

    try:
        records = json.loads(catalog_path.read_text(encoding="utf-8"))
    except ValueError as e:
        return False, [f"meal catalog is not valid JSON: {str(e)}"]

    if not isinstance(records, list):
        return False, ["meal catalog must be a JSON array"]

    meal_types = {
        str(record.get("Meal Type") or record.get("mealType") or "").lower()
        for record in records if isinstance(record, dict)
    }
    missing = sorted(REQUIRED_MEAL_TYPES - meal_types)
    if missing:
        return False, [f"meal catalog has no entries for: {', '.join(missing)}"]

    return True, []

def perform_startup_validation(strict: bool = False) -> bool:
    """
    Run every check and log the outcome.

    Problems are logged and the service keeps starting, since a bad catalog
    only degrades plan generation. With ``strict`` they raise
    StartupValidationError instead.
    """
    logger.info("Starting application validation...")

    all_issues = []
    validations = [
        ("Database URL", validate_database_url),
        ("CORS Origins", validate_cors_origins),
        ("Rate Limits", validate_rate_limits),
        ("Meal Catalog", validate_meal_catalog),
    ]

    for name, validator in validations:
        is_valid, issues = validator()
        if is_valid:
            logger.info(f"{name} validation passed")
            continue
        logger.error(f"{name} validation failed: {'; '.join(issues)}")
        all_issues.extend(f"{name}: {issue}" for issue in issues)

    if not all_issues:
        logger.info("All startup validations passed successfully")
        return True

    if strict:
        raise StartupValidationError(f"Startup validation failed: {'; '.join(all_issues)}")
    return False

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        sys.exit(0 if perform_startup_validation(strict=True) else 1)
    except StartupValidationError as e:
        print(f"Critical validation error: {str(e)}")
        sys.exit(1)
