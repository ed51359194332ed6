"""Event commands for the planner CLI."""

import asyncio
from datetime import date, timedelta
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from event_planner.core.planner_core.categories import CategoryRegistry
from event_planner.core.planner_core.config import PlannerSettings
from event_planner.core.planner_core.events import DEFAULT_CATEGORY, DayFileStore, Event, EventValidationError, TimeOfDay
from event_planner.core.planner_core.notifications import (
    POLL_INTERVAL_SECONDS,
    AsyncioRepeatingTimer,
    ConsoleNotifier,
    NotificationScheduler,
)
from event_planner.core.planner_core.state import EventDirectory
from event_planner.core.planner_core.utils import (
    days_in_month,
    first_weekday,
    format_date_display,
    format_day_key,
    parse_day_key,
)

console = Console()

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def get_settings() -> PlannerSettings:
    return PlannerSettings.load()


def get_directory(settings: Optional[PlannerSettings] = None) -> EventDirectory:
    """Build a directory over the configured data dir and load it."""
    settings = settings or get_settings()
    directory = EventDirectory(DayFileStore(settings.resolved_data_dir()))
    directory.load_all()
    return directory


def parse_day(text: str) -> date:
    """Parse a DATE argument: YYYY-MM-DD, today, tomorrow or yesterday."""
    keyword = text.strip().lower()
    today = date.today()
    if keyword == "today":
        return today
    if keyword == "tomorrow":
        return today + timedelta(days=1)
    if keyword == "yesterday":
        return today - timedelta(days=1)

    try:
        return parse_day_key(keyword)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, today or tomorrow, got {text!r}")


def parse_time_option(text: str) -> TimeOfDay:
    try:
        return TimeOfDay.parse(text)
    except ValueError:
        raise typer.BadParameter(f"Expected a time like 09:30, got {text!r}")


def fail(message: str) -> None:
    console.print(f"✗ {message}", style="red")
    raise typer.Exit(code=1)


def add(
    day: str = typer.Argument(..., help="Day of the event (YYYY-MM-DD, today, tomorrow)"),
    title: str = typer.Argument(..., help="Event title"),
    start: str = typer.Option(..., "--start", "-s", help="Start time (HH:MM)"),
    end: str = typer.Option(..., "--end", "-e", help="End time (HH:MM)"),
    description: str = typer.Option("", "--description", "-d", help="Longer description"),
    category: str = typer.Option(DEFAULT_CATEGORY, "--category", "-c", help="Category id"),
    notify: bool = typer.Option(False, "--notify/--no-notify", help="Show a notification before the event"),
    lead: Optional[int] = typer.Option(None, "--lead", help="Minutes before start to notify (default: global setting)"),
) -> None:
    """Add an event to a day."""
    event_day = parse_day(day)

    try:
        event = Event(
            title=title.strip(),
            start_time=parse_time_option(start),
            end_time=parse_time_option(end),
            description=description.strip(),
            category=category,
            show_notification=notify,
            notification_minutes=lead,
        )
        get_directory().add_event(event_day, event)
    except EventValidationError as e:
        fail(e.message)
    except ValidationError as e:
        fail(f"Invalid event: {e.errors()[0]['msg']}")

    console.print(f"✓ Added {event.title} ({event.time_range_label()}) on {format_day_key(event_day)}", style="green")


def list_items(
    day: str = typer.Argument("today", help="Day to show (YYYY-MM-DD, today, tomorrow)"),
) -> None:
    """List the events of a day."""
    event_day = parse_day(day)
    settings = get_settings()
    directory = get_directory(settings)
    categories = CategoryRegistry(settings)

    events = directory.events_for_day(event_day)
    if not events:
        console.print(f"No events on {format_date_display(event_day)}", style="dim")
        return

    table = Table(title=format_date_display(event_day))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Time", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Category")
    table.add_column("Notify", justify="center")

    for index, event in enumerate(events, start=1):
        category = categories.resolve(event.category)
        notify = ""
        if event.show_notification:
            minutes = event.notification_minutes if event.notification_minutes is not None else settings.notification_minutes
            notify = f"🔔 {minutes}m"
        table.add_row(
            str(index),
            event.time_range_label(),
            event.title,
            f"[{category.color}]●[/] {category.name}",
            notify,
        )

    console.print(table)


def edit(
    day: str = typer.Argument(..., help="Day of the event"),
    index: int = typer.Argument(..., help="Event number as shown by list"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    start: Optional[str] = typer.Option(None, "--start", "-s", help="New start time (HH:MM)"),
    end: Optional[str] = typer.Option(None, "--end", "-e", help="New end time (HH:MM)"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category id"),
    notify: Optional[bool] = typer.Option(None, "--notify/--no-notify", help="Turn the notification on or off"),
    lead: Optional[int] = typer.Option(None, "--lead", help="New notification lead time in minutes"),
) -> None:
    """Edit an event in place."""
    event_day = parse_day(day)
    directory = get_directory()
    events = directory.events_for_day(event_day)

    if index < 1 or index > len(events):
        fail(f"No event #{index} on {format_day_key(event_day)}")

    changes = {}
    if title is not None:
        changes["title"] = title.strip()
    if start is not None:
        changes["start_time"] = parse_time_option(start)
    if end is not None:
        changes["end_time"] = parse_time_option(end)
    if description is not None:
        changes["description"] = description.strip()
    if category is not None:
        changes["category"] = category
    if notify is not None:
        changes["show_notification"] = notify
    if lead is not None:
        changes["notification_minutes"] = lead

    try:
        updated = events[index - 1].copy_with(**changes)
        if not directory.update_event(event_day, index - 1, updated):
            fail(f"Could not update event #{index}")
    except EventValidationError as e:
        fail(e.message)
    except ValidationError as e:
        fail(f"Invalid event: {e.errors()[0]['msg']}")

    console.print(f"✓ Updated {updated.title} ({updated.time_range_label()})", style="green")


def delete(
    day: str = typer.Argument(..., help="Day of the event"),
    index: int = typer.Argument(..., help="Event number as shown by list"),
) -> None:
    """Delete an event."""
    event_day = parse_day(day)
    directory = get_directory()
    events = directory.events_for_day(event_day)

    if not directory.delete_event(event_day, index - 1):
        fail(f"No event #{index} on {format_day_key(event_day)}")

    console.print(f"✓ Deleted {events[index - 1].title}", style="green")


def upcoming(
    limit: int = typer.Option(5, "--limit", "-n", help="Maximum number of events"),
) -> None:
    """Show the next events from today onwards."""
    entries = get_directory().upcoming_events(limit)

    if not entries:
        console.print("No upcoming events", style="dim")
        return

    table = Table(title="Upcoming events")
    table.add_column("Day", style="cyan")
    table.add_column("Time", style="cyan")
    table.add_column("Title", style="bold")

    for entry in entries:
        table.add_row(entry.day_key, entry.event.time_range_label(), entry.event.title)

    console.print(table)


def stats() -> None:
    """Show event statistics."""
    settings = get_settings()
    statistics = get_directory(settings).statistics()
    categories = CategoryRegistry(settings)

    lines = [
        f"Total events: {statistics.total_events}",
        f"Days with events: {statistics.days_with_events}",
    ]
    for category_id, count in sorted(statistics.category_counts.items()):
        lines.append(f"  {categories.name_for(category_id)}: {count}")

    console.print(Panel("\n".join(lines), title="Event Planner Statistics"))


def calendar(
    year: Optional[int] = typer.Argument(None, help="Year (default: current)"),
    month: Optional[int] = typer.Argument(None, min=1, max=12, help="Month 1-12 (default: current)"),
) -> None:
    """Show a month grid, marking days that have events."""
    today = date.today()
    year = year or today.year
    month = month or today.month
    directory = get_directory()

    table = Table(title=date(year, month, 1).strftime("%B %Y"))
    for header in WEEKDAY_HEADERS:
        table.add_column(header, justify="right")

    cells = [""] * first_weekday(year, month)
    for day_number in range(1, days_in_month(year, month) + 1):
        current = date(year, month, day_number)
        label = str(day_number)
        count = directory.event_count(current)
        if count:
            label = f"[bold green]{day_number}•[/]"
        if current == today:
            label = f"[reverse]{label}[/reverse]"
        cells.append(label)

    while len(cells) % 7:
        cells.append("")

    for week in range(0, len(cells), 7):
        table.add_row(*cells[week:week + 7])

    console.print(table)


def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every event."""
    if not yes and not typer.confirm("Delete all events?"):
        console.print("Cancelled", style="dim")
        return

    get_directory().clear_all()
    console.print("✓ All events deleted", style="green")


def watch() -> None:
    """Run the notification scheduler until interrupted."""
    settings = get_settings()
    directory = get_directory(settings)

    async def run() -> None:
        scheduler = NotificationScheduler(directory, settings, ConsoleNotifier(console))

        # Pick up changes made by other planner commands
        refresher = AsyncioRepeatingTimer()
        refresher.start(POLL_INTERVAL_SECONDS, directory.load_all)

        scheduler.start()
        console.print(f"Watching for events (checking every {POLL_INTERVAL_SECONDS}s, Ctrl+C to stop)", style="dim")
        try:
            await asyncio.Event().wait()
        finally:
            refresher.cancel()
            scheduler.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("Stopped", style="dim")
