"""
Meal event logging for NutriTrack.
Provides structured JSON records for plan generation, rotation resets and
changes to a user's saved meals.
"""

import logging
import json
from typing import Dict, Any, Optional
from datetime import datetime
from pathlib import Path
from nutritrack.core.config import settings

class MealEventLogger:
    """Structured logging for meal plan activity"""

    def __init__(self, log_file: Optional[str] = None):
        """Initialize meal event logger"""
        self.logger = logging.getLogger('nutritrack.events')
        self.logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

        log_file = log_file or settings.MEAL_EVENT_LOG_FILE
        if log_file and not self.logger.handlers:
            self._configure_file_handler(Path(log_file))

    def _configure_file_handler(self, log_file: Path):
        """Configure the JSON lines file handler"""
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)

        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "event": %(message)s}',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

    def log_event(self, event_type: str, user_id: Optional[str], details: Dict[str, Any], severity: str = "INFO"):
        """
        Log a meal event with structured data

        Args:
            event_type: Type of event (e.g., 'plan_generated', 'meal_saved')
            user_id: ID of user involved in event
            details: Additional event details
            severity: Log severity level
        """
        if not settings.LOG_MEAL_EVENTS:
            return

        event_data = {
            "event_type": event_type,
            "user_id": user_id,
            "timestamp": datetime.now().isoformat(),
            "details": details,
            "source": "nutritrack"
        }

        log_message = json.dumps(event_data, default=str)

        if severity == "ERROR":
            self.logger.error(log_message)
        elif severity == "WARNING":
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

    def log_plan_generated(self, user_id: str, plan: Dict[str, Any]):
        """Log how many suggestions each category produced"""
        self.log_event("plan_generated", user_id, {
            "suggestions": {category: len(meals) for category, meals in plan.items()}
        })

    def log_rotation_reset(self, user_id: str, reason: str):
        """Log a weekly or user-triggered rotation reset"""
        self.log_event("rotation_reset", user_id, {"reason": reason})

    def log_meal_saved(self, user_id: str, meal_id: str, category: str):
        self.log_event("meal_saved", user_id, {"meal_id": meal_id, "category": category})

    def log_meal_removed(self, user_id: str, meal_id: str):
        self.log_event("meal_removed", user_id, {"meal_id": meal_id})

    def log_validation_failure(self, user_id: Optional[str], path: str, errors: Any):
        """Log rejected client input"""
        self.log_event("validation_failed", user_id, {"path": path, "errors": errors}, severity="WARNING")

# Global meal event logger instance
meal_event_logger = MealEventLogger()
