"""Configuration for the event planner."""

from .log import setup_logging
from .settings import (
    MAX_NOTIFICATION_MINUTES,
    MIN_NOTIFICATION_MINUTES,
    PlannerSettings,
    SettingsError,
    default_config_path,
    validate_notification_minutes,
)

__all__ = [
    "setup_logging",
    "MAX_NOTIFICATION_MINUTES",
    "MIN_NOTIFICATION_MINUTES",
    "PlannerSettings",
    "SettingsError",
    "default_config_path",
    "validate_notification_minutes",
]
