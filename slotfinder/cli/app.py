"""
Main CLI application using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, load_config
from ..domain.clock import clock_value_to_time
from ..domain.exceptions import InvalidConfigurationError, SlotFinderError, TimeParseError
from ..domain.models import TimeSlot
from ..services.slot_finder import SlotFinderService

app = typer.Typer(
    name="slotfinder",
    help="Find free fixed-size slots in a working day around busy periods",
    add_completion=False
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(config: AppConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def parse_busy_option(value: str) -> TimeSlot:
    """
    Parse a ``HH:MM-HH:MM`` command line value into a TimeSlot.

    Raises:
        TimeParseError: If the value is not a range of two clock times
    """
    parts = value.split("-")
    if len(parts) != 2:
        raise TimeParseError(f"Invalid busy period '{value}', expected HH:MM-HH:MM")

    start, end = (part.strip() for part in parts)
    slot = TimeSlot(start=start, end=end)
    # Parse eagerly so the error names the offending option.
    slot.to_range()
    return slot


def load_busy_file(path: Path) -> List[TimeSlot]:
    """
    Load busy periods from a YAML file.

    The file holds either a list of ``{start, end}`` mappings or a mapping
    with such a list under ``busy``.
    """
    if not path.exists():
        raise FileNotFoundError(f"Busy file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("busy", [])

    if not isinstance(data, list):
        raise InvalidConfigurationError(f"Busy file {path} must contain a list of periods.")

    busy: List[TimeSlot] = []
    for entry in data:
        if not isinstance(entry, dict) or "start" not in entry or "end" not in entry:
            raise InvalidConfigurationError(f"Invalid busy entry in {path}: {entry!r}")
        busy.append(TimeSlot(
            start=str(clock_value_to_time(entry["start"])),
            end=str(clock_value_to_time(entry["end"])),
        ))

    return busy


def _render_table(slots: List[TimeSlot]) -> Table:
    table = Table(
        title="Available slots",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Slot", style="bold green")

    for idx, slot in enumerate(slots, 1):
        table.add_row(str(idx), slot.format_display())

    return table


@app.command()
def find(
    busy: Annotated[Optional[List[str]], typer.Option("--busy", help="Busy period as HH:MM-HH:MM. Repeatable.")] = None,
    busy_file: Annotated[Optional[Path], typer.Option("--busy-file", help="YAML file with busy periods")] = None,
    slot_size: Annotated[Optional[int], typer.Option("--slot-size", "-s", help="Slot length in minutes")] = None,
    break_time: Annotated[Optional[int], typer.Option("--break-time", "-b", help="Break between slots in minutes")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start of the working window (HH:MM)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End of the working window (HH:MM)")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./slotfinder.yaml")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print slots as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Find available slots in a working day.

    Examples:

        slotfinder find --busy 09:00-10:30 --busy 14:00-15:30

        slotfinder find --busy-file busy.yaml --slot-size 45 --break-time 15

        slotfinder find --start 09:00 --end 12:00 --json
    """
    try:
        config = load_config(config_file)
        _configure_logging(config, verbose)

        periods: List[TimeSlot] = []
        if busy_file is not None:
            periods.extend(load_busy_file(busy_file))
        periods.extend(parse_busy_option(value) for value in busy or [])

        service = SlotFinderService(defaults=config.defaults)
        options = service.resolve_options(
            busy=periods,
            slot_size=slot_size,
            break_time=break_time,
            start_time=start,
            end_time=end,
        )
        slots = service.find_slots(options)

    except (FileNotFoundError, SlotFinderError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([slot.to_dict() for slot in slots], indent=2))
        return

    slot_words = pendulum.duration(minutes=options.slot_size).in_words(locale="en")

    console.print()
    console.print("[bold cyan]Summary:[/bold cyan]")
    console.print(f"   Window: {options.start_time} - {options.end_time}")
    console.print(f"   Slot size: {slot_words}")
    console.print(f"   Break: {options.break_time} min")
    console.print(f"   Busy periods: {len(options.busy)}")
    console.print()

    if not slots:
        console.print("[yellow]No available slots found.[/yellow]")
        return

    console.print(f"[bold green]{len(slots)} available slot(s) found[/bold green]\n")
    console.print(_render_table(slots))
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
