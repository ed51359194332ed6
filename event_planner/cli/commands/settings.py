"""Configuration and category commands for the planner CLI."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from event_planner.core.planner_core.categories import CategoryRegistry
from event_planner.core.planner_core.config import SettingsError

from .core import fail, get_settings

console = Console()


def config_show() -> None:
    """Show the current settings."""
    settings = get_settings()

    table = Table(title="Event Planner Settings", show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Notifications", "enabled" if settings.notifications_enabled else "disabled")
    table.add_row("Default lead time", f"{settings.notification_minutes} minutes")
    table.add_row("Data directory", str(settings.resolved_data_dir()))
    table.add_row("Custom categories", str(len(settings.custom_categories)))

    console.print(table)


def config_set(
    notifications: Optional[bool] = typer.Option(None, "--notifications/--no-notifications", help="Enable or disable notifications"),
    lead: Optional[int] = typer.Option(None, "--lead", help="Default minutes before an event to notify (5-60, step 5)"),
) -> None:
    """Change settings."""
    settings = get_settings()

    if notifications is None and lead is None:
        fail("Nothing to change; pass --notifications/--no-notifications or --lead")

    try:
        if notifications is not None:
            settings.notifications_enabled = notifications
        if lead is not None:
            settings.set_notification_minutes(lead)
    except SettingsError as e:
        fail(str(e))

    path = settings.save()
    console.print(f"✓ Settings saved to {path}", style="green")


def categories() -> None:
    """List built-in and custom categories."""
    registry = CategoryRegistry(get_settings())

    table = Table(title="Categories")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Color")
    table.add_column("Type")

    for category in registry.all_categories():
        table.add_row(
            category.id,
            category.name,
            f"[{category.color}]●[/] {category.color}",
            "built-in" if category.is_default else "custom",
        )

    console.print(table)


def category_add(
    name: str = typer.Argument(..., help="Display name"),
    color: str = typer.Argument(..., help="Color as #RRGGBB"),
) -> None:
    """Add a custom category."""
    registry = CategoryRegistry(get_settings())

    try:
        category = registry.add_custom(name, color)
    except SettingsError as e:
        fail(str(e))

    console.print(f"✓ Added category {category.name} (id: {category.id})", style="green")


def category_remove(
    category_id: str = typer.Argument(..., help="Id of the custom category"),
) -> None:
    """Remove a custom category."""
    registry = CategoryRegistry(get_settings())

    try:
        registry.remove_custom(category_id)
    except SettingsError as e:
        fail(str(e))

    console.print(f"✓ Removed category {category_id}", style="green")
