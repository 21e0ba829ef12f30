"""Command line maintenance commands for HabitTracker."""

from __future__ import annotations

import click

from .config import BaseConfig
from .errors import StoreInitError
from .infra.database import Store
from .logging_config import setup_logging
from .services import HabitDataManager, seed_preview_data


@click.group()
@click.option(
    "--database-url",
    envvar="HABITTRACKER_DATABASE_URL",
    default=None,
    help="SQLAlchemy URL of the record store (defaults to the data directory).",
)
@click.pass_context
def main(ctx: click.Context, database_url: str | None) -> None:
    """Manage the HabitTracker record store."""

    config = BaseConfig()
    if database_url:
        config.DATABASE_URL = database_url
    setup_logging(config)

    try:
        store = Store(config).open()
    except StoreInitError as exc:
        # Startup is the only place a store failure is fatal.
        raise click.ClickException(str(exc)) from exc
    ctx.call_on_close(store.close)
    ctx.obj = HabitDataManager(store)


@main.command("init-db")
def init_db() -> None:
    """Create the database schema."""

    click.echo("Database ready.")


@main.command("seed")
@click.option("--force", is_flag=True, default=False, help="Seed even if habits exist")
@click.pass_obj
def seed(manager: HabitDataManager, force: bool) -> None:
    """Insert the sample category, habit and completion."""

    summary = seed_preview_data(manager, force=force)
    if summary.habits == 0:
        click.echo("Habits already exist; nothing seeded. Use --force to seed anyway.")
        return
    click.echo(
        f"Seeded {summary.categories} category, {summary.habits} habit, "
        f"{summary.completions} completion."
    )


@main.command("stats")
@click.option("--days", default=7, show_default=True, type=click.IntRange(min=1))
@click.pass_obj
def stats(manager: HabitDataManager, days: int) -> None:
    """Show today's state, streak and completion rate for active habits."""

    habits = manager.fetch_active_habits()
    if not habits:
        click.echo("No active habits.")
        return

    today = manager.now()
    for habit in habits:
        done = "x" if manager.is_habit_completed(habit, today) else " "
        streak = manager.get_completion_streak(habit)
        percentage = manager.get_completion_percentage(habit, days)
        click.echo(
            f"[{done}] {habit.name} ({habit.frequency.value}) "
            f"streak={streak} last{days}d={percentage:.1f}%"
        )


@main.command("reset")
@click.confirmation_option(prompt="Delete all habits, categories and completions?")
@click.pass_obj
def reset(manager: HabitDataManager) -> None:
    """Delete every record."""

    manager.delete_all_data()
    click.echo("All data deleted.")


if __name__ == "__main__":  # pragma: no cover
    main()
