"""Event notification scheduling for the event planner."""

from .notifier import (
    NOTIFICATION_TITLE,
    ConsoleNotifier,
    Notification,
    Notifier,
    Urgency,
    build_notification,
)
from .scheduler import (
    POLL_INTERVAL_SECONDS,
    NotificationIdentity,
    NotificationScheduler,
)
from .timer import AsyncioRepeatingTimer, RepeatingTimer

__all__ = [
    "NOTIFICATION_TITLE",
    "ConsoleNotifier",
    "Notification",
    "Notifier",
    "Urgency",
    "build_notification",
    "POLL_INTERVAL_SECONDS",
    "NotificationIdentity",
    "NotificationScheduler",
    "AsyncioRepeatingTimer",
    "RepeatingTimer",
]
