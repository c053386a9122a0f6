import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import Optional
from datetime import datetime
from pathlib import Path
import json
import logging

from pydantic import ValidationError

from studycards.aggregator import card_stage
from studycards.config import settings
from studycards.database import SessionLocal, init_db
from studycards.errors import StudyCardsError
from studycards.schemas import Card
from studycards.selector import order_by_urgency, select_due
from studycards.service import ReviewService
from studycards.sm2 import SM2Algorithm
from studycards.store import SqlAlchemyProgressStore

app = typer.Typer(help="Study Cards CLI - spaced repetition scheduling for flashcards")
console = Console()


def get_store() -> SqlAlchemyProgressStore:
    """Progress store bound to the configured database"""
    return SqlAlchemyProgressStore(SessionLocal)


def parse_when(value: Optional[str]) -> datetime:
    """Parse a YYYY-MM-DD option, defaulting to now"""
    if value:
        try:
            return datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            console.print(f"[red]✗[/red] Invalid date '{value}'. Use YYYY-MM-DD")
            raise typer.Exit(code=1)
    return datetime.now()


def fail(error: Exception):
    console.print(f"[red]✗[/red] Error: {error}")
    raise typer.Exit(code=1)


@app.callback()
def main():
    """Configure logging once for every command"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def import_cards(
    file_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a list of cards"),
    course: str = typer.Option(..., help="Course the cards belong to")
):
    """Load externally authored cards from a JSON file"""
    try:
        raw_items = json.loads(file_path.read_text(encoding="utf-8"))
        cards = [Card(**{**item, "course_id": course}) for item in raw_items]
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
        fail(e)

    try:
        saved = get_store().add_cards(cards)
    except StudyCardsError as e:
        fail(e)

    console.print(f"[green]✓[/green] Imported {saved} cards into course {course}")


@app.command()
def review(
    user: str = typer.Option(..., help="User ID"),
    card: str = typer.Option(..., help="Card ID"),
    correct: bool = typer.Option(False, "--correct", help="Card was answered correctly"),
    incorrect: bool = typer.Option(False, "--incorrect", help="Card was answered incorrectly"),
    quality: Optional[int] = typer.Option(None, help="Quality rating 0-5 (instead of --correct/--incorrect)"),
    review_date: Optional[str] = typer.Option(None, "--date", help="Review date (YYYY-MM-DD), default: today")
):
    """Record a review and reschedule the card"""
    if [correct, incorrect, quality is not None].count(True) != 1:
        console.print("[red]✗[/red] Pass exactly one of --correct, --incorrect or --quality")
        raise typer.Exit(code=1)

    outcome = quality if quality is not None else correct
    now = parse_when(review_date)
    service = ReviewService(get_store(), settings.mastered_repetitions)
    try:
        state = service.grade_and_schedule(user, card, outcome, now)
    except StudyCardsError as e:
        fail(e)

    console.print("[green]✓[/green] Review recorded!")
    console.print(f"  Card: {card}")
    console.print(f"  Quality: {state.quality}/5")
    console.print(f"  Next review: {state.next_review_at} (in {state.interval} days)")
    console.print(f"  Easiness: {state.ease_factor:.2f}")
    console.print(f"  Repetitions: {state.repetitions}")


@app.command()
def due(
    user: str = typer.Option(..., help="User ID"),
    course: str = typer.Option(..., help="Course ID"),
    on_date: Optional[str] = typer.Option(None, "--date", help="Reference date (YYYY-MM-DD), default: today")
):
    """List cards due for review, most overdue first"""
    now = parse_when(on_date)
    store = get_store()
    service = ReviewService(store, settings.mastered_repetitions)
    try:
        pool = store.get_course_cards(course)
        progress = service.load_progress(pool, user)
    except StudyCardsError as e:
        fail(e)

    due_cards = select_due(pool, progress, now)
    if not due_cards:
        console.print(f"[yellow]No cards due for user {user} in course {course}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Card", style="cyan")
    table.add_column("Question", style="green")
    table.add_column("Stage", style="blue")
    table.add_column("Due Date", style="yellow")
    table.add_column("Days Overdue", style="red")

    for item in order_by_urgency(due_cards, progress, now):
        state = progress.get(item.id)
        stage = card_stage(state, settings.mastered_repetitions).value
        if state is None:
            table.add_row(item.id, item.question[:50], stage, "-", "New")
            continue
        days_overdue = SM2Algorithm.get_days_overdue(state.next_review_at, now)
        table.add_row(
            item.id,
            item.question[:50],
            stage,
            str(state.next_review_at),
            str(days_overdue) if days_overdue > 0 else "Today"
        )

    console.print(table)


@app.command()
def stats(
    user: str = typer.Option(..., help="User ID"),
    course: str = typer.Option(..., help="Course ID"),
    on_date: Optional[str] = typer.Option(None, "--date", help="Reference date (YYYY-MM-DD), default: today")
):
    """Show progress statistics for a course"""
    now = parse_when(on_date)
    store = get_store()
    service = ReviewService(store, settings.mastered_repetitions)
    try:
        pool = store.get_course_cards(course)
        summary = service.get_stats(pool, user, now)
    except StudyCardsError as e:
        fail(e)

    console.print(f"\n[bold]Progress - user {user}, course {course}[/bold]\n")
    console.print(f"  Total cards: {summary.total}")
    console.print(f"  Reviewed: {summary.reviewed}")
    console.print(f"  Mastered: {summary.mastered}")
    console.print(f"  Due now: {summary.due}")


@app.command()
def reset_progress(
    user: str = typer.Option(..., prompt="User ID"),
    card: str = typer.Option(..., prompt="Card ID"),
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt")
):
    """Delete a user's progress on one card (irreversible)"""
    if not yes and not typer.confirm(f"⚠️  Forget all progress of user {user} on card {card}?"):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    try:
        removed = ReviewService(get_store()).reset_progress(user, card)
    except StudyCardsError as e:
        fail(e)

    if removed:
        console.print(f"[green]✓[/green] Progress reset for card {card}")
    else:
        console.print(f"[yellow]No progress recorded for card {card}[/yellow]")


if __name__ == "__main__":
    app()
