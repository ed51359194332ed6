"""Event model and persistence for the event planner."""

from .schemas import (
    DEFAULT_CATEGORY,
    Event,
    EventValidationError,
    TimeOfDay,
    ValidationResult,
)
from .store import DayFileStore, default_data_dir

__all__ = [
    "DEFAULT_CATEGORY",
    "Event",
    "EventValidationError",
    "TimeOfDay",
    "ValidationResult",
    "DayFileStore",
    "default_data_dir",
]
