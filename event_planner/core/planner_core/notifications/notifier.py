"""Notification payloads and the renderers that display them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from ..events import Event

NOTIFICATION_TITLE = "📅 Event Planner"


class Urgency(Enum):
    """Notification urgency levels."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class Notification:
    """A user-facing alert for an upcoming event."""
    title: str
    body: str
    event_title: str
    urgency: Urgency = Urgency.CRITICAL
    transient: bool = False  # persistent alerts stay until dismissed


def build_notification(event: Event, lead_minutes: int) -> Notification:
    """Build the alert shown ahead of an event.

    Args:
        event: Event that is about to start
        lead_minutes: Minutes between now and the event start

    Returns:
        Persistent, critical-urgency notification
    """
    body = f"{event.title}\nStarts at {event.start_time}"
    if lead_minutes > 0:
        body += f" (in {lead_minutes} minutes)"

    return Notification(title=NOTIFICATION_TITLE, body=body, event_title=event.title)


class Notifier(ABC):
    """Displays notifications for the scheduler."""

    @abstractmethod
    def notify(self, event: Event, lead_minutes: int) -> None:
        """Show a notification for ``event`` starting in ``lead_minutes``."""
        pass

    @abstractmethod
    def release(self) -> None:
        """Drop any notification that is still on display."""
        pass


class ConsoleNotifier(Notifier):
    """Renders notifications as rich panels on a terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.current: Optional[Notification] = None

    def notify(self, event: Event, lead_minutes: int) -> None:
        # Only one notification is live at a time
        self.release()

        notification = build_notification(event, lead_minutes)
        self.current = notification
        self.console.print(Panel(
            notification.body,
            title=notification.title,
            border_style="bold red",
            expand=False,
        ))

    def release(self) -> None:
        self.current = None
