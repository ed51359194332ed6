"""In-memory event state for the event planner."""

from .directory import DirectorySignal, EventDirectory, Subscription
from .models import EventStatistics, UpcomingEvent

__all__ = [
    "DirectorySignal",
    "EventDirectory",
    "Subscription",
    "EventStatistics",
    "UpcomingEvent",
]
