"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.mock_tutor_client import MockTutorClient
from ..adapters.tutor_api_client import TutorAPIClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import TutorSlotsError
from ..services.booking_planner import BookingPlannerService

app = typer.Typer(
    name="tutorslots",
    help="Browse tutor availability and book tutoring sessions",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use bundled mock tutors instead of the API.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _load_config(config_file: Optional[Path], mock: bool) -> AppConfig:
    """Load the config file; in mock mode a missing file falls back to defaults."""
    config_path = config_file or get_default_config_path()
    if mock and not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, mock: bool) -> BookingPlannerService:
    if mock:
        client = MockTutorClient()
    else:
        client = TutorAPIClient(base_url=config.api_base_url, token=config.api_token)

    return BookingPlannerService(
        tutor_client=client,
        horizon_days=config.defaults.horizon_days,
        display_days=config.defaults.display_days,
        timezone=config.timezone,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_date(value: str, tz: Optional[str]):
    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz or pendulum.local_timezone()).date()
    except ValueError as e:
        console.print(f"[red]Could not parse date '{value}': {e}[/red]")
        raise typer.Exit(1)


@app.command()
def slots(
    tutor_id: Annotated[str, typer.Argument(help="Tutor ID")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show a tutor's bookable slots for the upcoming days.

    Examples:

        tutorslots slots tutor-1 --mock
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        service = _build_service(config, mock)

        if mock:
            console.print("[yellow]⚠  MOCK MODE: using bundled tutor data[/yellow]\n")

        schedule = service.display_schedule(tutor_id)

        if not schedule:
            console.print(
                "[yellow]⚠ No available slots found.[/yellow]\n"
                "Try a custom request with 'tutorslots book'."
            )
            return

        table = Table(
            title=f"Available slots for {tutor_id}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Date", style="bold yellow")
        table.add_column("Times")

        for day_slots in schedule.values():
            table.add_row(
                day_slots[0].display_date,
                ", ".join(slot.display_time for slot in day_slots)
            )

        console.print()
        console.print(table)
        console.print()

    except (TutorSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    tutor_id: Annotated[str, typer.Argument(help="Tutor ID")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Time (HH:MM)")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Check whether a custom date and time fall inside a tutor's availability.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        service = _build_service(config, mock)
        day = _parse_date(date, config.timezone)

        if service.is_custom_time_available(tutor_id, day, time):
            console.print(f"[green]✓ {date} {time} is within the tutor's availability.[/green]")
        else:
            console.print(
                f"[yellow]⚠ {date} {time} is outside the tutor's availability.[/yellow]\n"
                "You can still send a custom request; the tutor may decline it."
            )

    except (TutorSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def book(
    tutor_id: Annotated[str, typer.Argument(help="Tutor ID")],
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Time (HH:MM)")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Session duration in minutes")] = None,
    subject: Annotated[Optional[str], typer.Option("--subject", "-s", help="Subject of the session")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n", help="Message for the tutor")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Book a session at a given date and time.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, mock)
        service = _build_service(config, mock)
        day = _parse_date(date, config.timezone)

        outcome = service.request_custom_booking(
            tutor_id,
            day,
            time,
            duration_minutes=duration if duration is not None else config.defaults.duration_minutes,
            subject=subject,
            notes=notes,
        )

        booking = outcome.booking
        body = (
            f"[bold]Booking:[/bold] {booking.get('id', 'N/A')}\n"
            f"[bold]Status:[/bold] {booking.get('status', 'N/A')}\n"
            f"[bold]When:[/bold] {date} {time}"
        )
        if not outcome.within_availability:
            body += "\n\n[yellow]Requested outside the tutor's regular availability.[/yellow]"

        console.print(Panel.fit(body, title="✓ Booking submitted"))

    except (TutorSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]tutorslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
