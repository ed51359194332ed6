import typer

from event_planner.core.planner_core.config import setup_logging

from .commands.core import add, list_items, edit, delete, upcoming, stats, calendar, clear, watch
from .commands.settings import config_show, config_set, categories, category_add, category_remove

app = typer.Typer(help="Event Planner - per-day events with reminders")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Event Planner - per-day events with reminders."""
    setup_logging(verbose)


# Register event commands
app.command()(add)
app.command(name="list")(list_items)  # "list" is a Python builtin, so use name mapping
app.command()(edit)
app.command()(delete)
app.command()(upcoming)
app.command()(stats)
app.command()(calendar)
app.command()(clear)
app.command()(watch)

# Register settings commands
app.command(name="config")(config_show)
app.command(name="config-set")(config_set)
app.command()(categories)
app.command(name="category-add")(category_add)
app.command(name="category-remove")(category_remove)


# Entry point function for the CLI script
def cli() -> None:
    app()
