"""Polling scheduler that notifies about today's events ahead of time."""

import logging
from datetime import date, datetime
from typing import Callable, List, NamedTuple, Optional, Protocol, Set

from ..events import Event
from ..state import DirectorySignal, EventDirectory, Subscription
from ..utils.dates import format_day_key, format_time
from .notifier import Notifier
from .timer import AsyncioRepeatingTimer, RepeatingTimer

POLL_INTERVAL_SECONDS = 15

# A notification fires while the current minute is within this many
# minutes after the notify minute.
NOTIFY_WINDOW_MINUTES = 1


class NotificationSettings(Protocol):
    """Settings the scheduler reads on every pass."""
    notifications_enabled: bool
    notification_minutes: int


class NotificationIdentity(NamedTuple):
    """Key under which a fired notification is remembered.

    Events with the same title and start time on the same day share an
    identity and therefore notify once between them.
    """
    day_key: str
    title: str
    start_hour: int
    start_minute: int

    @classmethod
    def for_event(cls, day_key: str, event: Event) -> "NotificationIdentity":
        return cls(day_key, event.title, event.start_time.hour, event.start_time.minute)

    def __str__(self) -> str:
        return f"{self.day_key}-{self.title}-{format_time(self.start_hour, self.start_minute)}"


class NotificationScheduler:
    """Fires one notification per event when its lead time is reached.

    The scheduler is either stopped or running. While running, a repeating
    timer calls check_events every POLL_INTERVAL_SECONDS. Fired
    notifications are remembered by identity so each event notifies once;
    that memory is cleared on day rollover, when an event is edited, and
    when an event disappears or stops asking for notifications.
    """

    def __init__(
        self,
        directory: EventDirectory,
        settings: NotificationSettings,
        notifier: Notifier,
        timer: Optional[RepeatingTimer] = None,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the scheduler.

        Args:
            directory: Directory to read today's events from
            settings: Global enable flag and default lead minutes
            notifier: Renderer for fired notifications
            timer: Repeating timer (default: asyncio-based)
            clock: Returns the current local time (default: datetime.now)
            logger: Logger to report to (default: module logger)
        """
        self.directory = directory
        self.settings = settings
        self.notifier = notifier
        self.timer = timer or AsyncioRepeatingTimer()
        self.clock = clock or datetime.now
        self.logger = logger or logging.getLogger(__name__)

        self._notified: Set[NotificationIdentity] = set()
        self._subscription: Optional[Subscription] = None
        self._running = False

        self._attach()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def notified(self) -> Set[NotificationIdentity]:
        """Identities notified so far (a copy)."""
        return set(self._notified)

    def start(self) -> None:
        """Check once immediately, then every POLL_INTERVAL_SECONDS."""
        if self._running:
            self.logger.debug("Notification scheduler already running")
            return

        self._attach()
        self._tick()
        self.timer.start(POLL_INTERVAL_SECONDS, self._tick)
        self._running = True
        self.logger.info(f"Notification scheduler started ({POLL_INTERVAL_SECONDS}s interval)")

    def stop(self) -> None:
        """Stop polling and forget all notification history. Safe to repeat."""
        self.timer.cancel()

        if self._subscription is not None:
            self.directory.unsubscribe(self._subscription)
            self._subscription = None

        self.notifier.release()
        self._notified.clear()

        if self._running:
            self._running = False
            self.logger.info("Notification scheduler stopped")

    def clear_history(self) -> None:
        """Forget every notification fired so far."""
        self._notified.clear()

    def check_events(self, now: Optional[datetime] = None) -> List[Event]:
        """Run one evaluation pass.

        Args:
            now: Current local time (default: from the clock)

        Returns:
            Events notified during this pass
        """
        if not self.settings.notifications_enabled:
            return []

        default_minutes = self.settings.notification_minutes
        now = now or self.clock()
        today = date(now.year, now.month, now.day)
        day_key = format_day_key(today)
        current_minute = now.hour * 60 + now.minute

        self._forget_other_days(day_key)

        fired: List[Event] = []
        valid: Set[NotificationIdentity] = set()

        for event in self.directory.events_for_day(today):
            if not event.show_notification:
                continue

            identity = NotificationIdentity.for_event(day_key, event)
            valid.add(identity)

            if identity in self._notified:
                continue

            lead_minutes = event.notification_minutes if event.notification_minutes is not None else default_minutes
            notify_minute = event.start_minutes - lead_minutes

            if notify_minute <= current_minute <= notify_minute + NOTIFY_WINDOW_MINUTES:
                self._notify(event, lead_minutes)
                self._notified.add(identity)
                fired.append(event)

        self._forget_invalid(day_key, valid)
        return fired

    def _tick(self) -> None:
        try:
            self.check_events()
        except Exception:
            self.logger.exception("Error while checking events")

    def _notify(self, event: Event, lead_minutes: int) -> None:
        self.logger.info(f"Notifying '{event.title}' at {event.start_time} ({lead_minutes} min lead)")
        try:
            self.notifier.notify(event, lead_minutes)
        except Exception:
            self.logger.exception(f"Error showing notification for '{event.title}'")

    def _attach(self) -> None:
        if self._subscription is None:
            self._subscription = self.directory.subscribe(DirectorySignal.EVENT_UPDATED, self._on_event_updated)

    def _on_event_updated(self, day_key: str, previous_title: str) -> None:
        stale = {
            identity for identity in self._notified
            if identity.day_key == day_key and identity.title == previous_title
        }
        if stale:
            self._notified -= stale
            self.logger.debug(f"Cleared {len(stale)} notification(s) for edited event '{previous_title}'")

    def _forget_other_days(self, day_key: str) -> None:
        old = {identity for identity in self._notified if identity.day_key != day_key}
        if old:
            self._notified -= old
            self.logger.debug(f"Cleaned up {len(old)} notification(s) from previous days")

    def _forget_invalid(self, day_key: str, valid: Set[NotificationIdentity]) -> None:
        gone = {
            identity for identity in self._notified
            if identity.day_key == day_key and identity not in valid
        }
        if gone:
            self._notified -= gone
            self.logger.debug(f"Cleaned up {len(gone)} notification(s) for deleted events")
