"""In-memory event directory backed by the per-day file store."""

import itertools
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..events import DayFileStore, Event
from ..utils.dates import DateLike, format_day_key, normalize_date
from .models import EventStatistics, UpcomingEvent


class DirectorySignal(str, Enum):
    """Change notifications emitted by an EventDirectory."""
    ALL_LOADED = "all-events-loaded"      # no arguments
    DAY_CHANGED = "day-changed"           # (day_key)
    EVENT_UPDATED = "event-updated"       # (day_key, previous_title)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by EventDirectory.subscribe."""
    subscription_id: int
    signal: DirectorySignal


Handler = Callable[..., Any]


class EventDirectory:
    """Authoritative mapping of day key to that day's sorted events.

    All mutations go through this class so that every day stays sorted by
    start time, is persisted after each change and announces the change to
    subscribers. Date arguments may be dates, datetimes or day keys; only
    the calendar day is used.
    """

    def __init__(self, store: DayFileStore, logger: Optional[logging.Logger] = None):
        """Initialize the directory.

        Args:
            store: Persistence store for the day files
            logger: Logger to report to (default: module logger)
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self._days: Dict[str, List[Event]] = {}
        self._dropped: Dict[str, int] = {}  # unreadable records per day, lost on next save
        self._handlers: Dict[int, Tuple[DirectorySignal, Handler]] = {}
        self._ids = itertools.count(1)

    # Subscriptions

    def subscribe(self, signal: DirectorySignal, handler: Handler) -> Subscription:
        """Register a handler for one kind of change notification.

        Args:
            signal: Notification kind to listen for
            handler: Callable invoked with the signal's arguments

        Returns:
            Handle to pass to unsubscribe
        """
        subscription = Subscription(subscription_id=next(self._ids), signal=DirectorySignal(signal))
        self._handlers[subscription.subscription_id] = (subscription.signal, handler)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        return self._handlers.pop(subscription.subscription_id, None) is not None

    def _emit(self, signal: DirectorySignal, *args: Any) -> None:
        for kind, handler in list(self._handlers.values()):
            if kind != signal:
                continue
            try:
                handler(*args)
            except Exception:
                self.logger.exception(f"Handler for {signal.value} failed")

    # Loading

    def load_all(self) -> None:
        """Replace the in-memory state with everything in the store."""
        self._days.clear()
        self._dropped.clear()

        for day_key, records in self.store.load_all().items():
            events = []
            for record in records:
                try:
                    events.append(Event.from_record(record))
                except ValidationError as e:
                    self.logger.error(f"Skipping malformed event in {day_key}: {e}")
                    self._dropped[day_key] = self._dropped.get(day_key, 0) + 1

            if events:
                events.sort(key=lambda event: event.start_minutes)
                self._days[day_key] = events

        self.logger.debug(f"Directory now has {len(self._days)} days with events")
        self._emit(DirectorySignal.ALL_LOADED)

    # Queries

    def events_for_day(self, day: DateLike) -> List[Event]:
        """Events of one day in start-time order (empty list if none)."""
        return list(self._days.get(self._key(day), []))

    def has_events(self, day: DateLike) -> bool:
        return bool(self._days.get(self._key(day)))

    def event_count(self, day: DateLike) -> int:
        return len(self._days.get(self._key(day), []))

    def dates_with_events(self) -> List[str]:
        """Day keys that currently hold events, in ascending order."""
        return sorted(self._days)

    def upcoming_events(self, limit: int = 5, today: Optional[DateLike] = None) -> List[UpcomingEvent]:
        """Events from today onwards, in day then start-time order.

        Args:
            limit: Maximum number of entries to return
            today: Day to start from (default: the current local date)

        Returns:
            Up to ``limit`` upcoming events
        """
        today_key = self._key(today if today is not None else date.today())
        upcoming: List[UpcomingEvent] = []

        if limit <= 0:
            return upcoming

        # YYYY-MM-DD keys sort in date order
        for day_key in sorted(self._days):
            if day_key < today_key:
                continue
            for event in self._days[day_key]:
                upcoming.append(UpcomingEvent(day_key=day_key, event=event))
                if len(upcoming) >= limit:
                    return upcoming

        return upcoming

    def statistics(self) -> EventStatistics:
        """Count events overall and per category."""
        stats = EventStatistics(days_with_events=len(self._days))

        for events in self._days.values():
            stats.total_events += len(events)
            for event in events:
                stats.category_counts[event.category] = stats.category_counts.get(event.category, 0) + 1

        return stats

    # Mutations

    def add_event(self, day: DateLike, event: Event) -> None:
        """Add an event to a day.

        Raises:
            EventValidationError: If the event is not valid
        """
        event.ensure_valid()
        day_key = self._key(day)

        events = self._days.setdefault(day_key, [])
        events.append(event)
        events.sort(key=lambda item: item.start_minutes)

        self._save_and_notify(day_key)
        self.logger.debug(f"Added '{event.title}' to {day_key} ({len(events)} events)")

    def update_event(self, day: DateLike, index: int, event: Event) -> bool:
        """Replace the event at ``index`` of a day.

        Returns:
            False if the index is out of range for that day

        Raises:
            EventValidationError: If the new event is not valid
        """
        day_key = self._key(day)
        events = self._days.get(day_key)

        if not events or index < 0 or index >= len(events):
            self.logger.error(f"Invalid event index {index} for {day_key}")
            return False

        event.ensure_valid()
        previous_title = events[index].title

        events[index] = event
        events.sort(key=lambda item: item.start_minutes)

        self._save_and_notify(day_key)
        self._emit(DirectorySignal.EVENT_UPDATED, day_key, previous_title)
        return True

    def delete_event(self, day: DateLike, index: int) -> bool:
        """Remove the event at ``index`` of a day.

        Returns:
            False if the index is out of range for that day
        """
        day_key = self._key(day)
        events = self._days.get(day_key)

        if not events or index < 0 or index >= len(events):
            self.logger.error(f"Invalid event index {index} for {day_key}")
            return False

        removed = events.pop(index)
        if not events:
            del self._days[day_key]

        self._save_and_notify(day_key)
        self.logger.debug(f"Deleted '{removed.title}' from {day_key}")
        return True

    def clear_all(self) -> None:
        """Forget every event and delete all day files."""
        self._days.clear()
        self._dropped.clear()
        self.store.clear_all()
        self._emit(DirectorySignal.ALL_LOADED)

    def _save_and_notify(self, day_key: str) -> None:
        records = [event.to_record() for event in self._days.get(day_key, [])]
        if not self.store.save_day(day_key, records):
            self.logger.warning(f"Events for {day_key} were changed but not saved")
        elif day_key in self._dropped:
            dropped = self._dropped.pop(day_key)
            self.logger.warning(f"Saved {day_key} without {dropped} unreadable event(s) from the old file")
        self._emit(DirectorySignal.DAY_CHANGED, day_key)

    @staticmethod
    def _key(day: DateLike) -> str:
        return format_day_key(normalize_date(day))
