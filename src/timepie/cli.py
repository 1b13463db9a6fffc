"""timepie CLI - 24-hour pie dial for your day."""

import json
import logging
import re
import sys
from datetime import date, datetime, time
from pathlib import Path

import click

from .adapters import EventSourceError
from .config import load_config
from .core.dial import angle_to_time, time_to_angle
from .core.interaction import dispatch_slice_click
from .core.slices import Slice, slice_hour
from .workflows import day_slices, default_output_path, render_day, week_dials, write_dial

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def _parse_date(target_date: str | None) -> date:
    if not target_date:
        return date.today()
    try:
        return date.fromisoformat(target_date)
    except ValueError:
        raise click.BadParameter(f"Invalid date {target_date!r}, expected YYYY-MM-DD", param_hint="--date")


def _slice_to_dict(s: Slice) -> dict:
    return {
        "start_angle": s.start_angle,
        "end_angle": s.end_angle,
        "color": s.color,
        "is_empty": s.is_empty,
        "hour": slice_hour(s),
        "event_type": s.event_type.value if s.event_type else None,
        "event": (
            {
                "id": s.event.id,
                "title": s.event.title,
                "start_at": s.event.start_at.isoformat(),
                "end_at": s.event.end_at.isoformat(),
            }
            if s.event
            else None
        ),
    }


def _format_slice(s: Slice) -> str:
    span = f"{s.start_angle:6.2f}° → {s.end_angle:6.2f}°"
    if s.event is None:
        return f"  {span}  (free)"
    return f"  {span}  {s.event.title} [{s.event_type.value}] {s.color}"


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """timepie - 24-hour pie dial for your day."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to show (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def slices(target_date: str | None, as_json: bool):
    """Show the dial slices for a day."""
    config = load_config()
    target = _parse_date(target_date)
    try:
        result = day_slices(config, target)
    except EventSourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([_slice_to_dict(s) for s in result], indent=2))
        return

    click.echo(f"### {target.strftime('%A, %B %d')}")
    for s in result:
        click.echo(_format_slice(s))


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to render (YYYY-MM-DD), defaults to today")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="SVG file to write, defaults to OUTPUT_DIR/<date>.svg")
@click.option("--size", type=click.IntRange(min=50), default=None, help="Dial size in pixels")
def render(target_date: str | None, output: Path | None, size: int | None):
    """Render a day's dial to SVG."""
    config = load_config()
    target = _parse_date(target_date)
    try:
        svg = render_day(config, target, now=datetime.now(), size=size)
    except EventSourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    path = write_dial(svg, output or default_output_path(config, target))
    click.echo(f"✓ Dial saved to {path}")


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Any date in the week (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(target_date: str | None, as_json: bool):
    """Show a dial summary for each day of the week."""
    config = load_config()
    target = _parse_date(target_date)
    try:
        dials = week_dials(config, target)
    except EventSourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "date": d.date.isoformat(),
                        "event_count": d.event_count,
                        "slices": [_slice_to_dict(s) for s in d.slices],
                    }
                    for d in dials
                ],
                indent=2,
            )
        )
        return

    today = date.today()
    for d in dials:
        marker = "*" if d.date == today else " "
        # Overnight slices run backwards (345 -> 15); count their forward span.
        busy = sum((s.end_angle - s.start_angle) % 360 for s in d.slices if not s.is_empty)
        click.echo(f"{marker} {d.date.strftime('%a %b %d')}  {d.event_count:2} events  {busy / 15:5.1f}h booked")


@main.command()
@click.argument("clock_time")
def angle(clock_time: str):
    """Print the dial angle of a time of day (HH:MM)."""
    match = _HHMM.match(clock_time.strip())
    if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
        raise click.BadParameter(f"Invalid time {clock_time!r}, expected HH:MM", param_hint="CLOCK_TIME")
    value = time(int(match.group(1)), int(match.group(2)))
    click.echo(f"{time_to_angle(value):g}")


@main.command("time")
@click.argument("angle_deg", type=float)
@click.option("--date", "-d", "target_date", default=None,
              help="Date for the result (YYYY-MM-DD), defaults to today")
def time_cmd(angle_deg: float, target_date: str | None):
    """Print the time of day at a dial angle."""
    target = _parse_date(target_date)
    click.echo(angle_to_time(angle_deg, target).isoformat(timespec="minutes"))


@main.command("click")
@click.argument("index", type=int)
@click.option("--date", "-d", "target_date", default=None,
              help="Date of the dial (YYYY-MM-DD), defaults to today")
def click_cmd(index: int, target_date: str | None):
    """Show what clicking the INDEX-th slice would open."""
    config = load_config()
    target = _parse_date(target_date)
    try:
        result = day_slices(config, target)
    except EventSourceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not 0 <= index < len(result):
        click.echo(f"Error: slice index must be between 0 and {len(result) - 1}", err=True)
        sys.exit(1)

    dispatch_slice_click(
        result[index],
        on_event_click=lambda e: click.echo(f"Edit event: {e.title} ({e.id})"),
        on_time_slot_click=lambda hour: click.echo(f"Create event at {hour:02d}:00 on {target}"),
    )


@main.command()
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="SVG file to keep refreshed, defaults to OUTPUT_DIR/today.svg")
def watch(output: Path | None):
    """Re-render today's dial every REFRESH_SECONDS."""
    from .clock import run_clock

    config = load_config()
    path = output or config.resolved_output_dir() / "today.svg"

    def on_tick(now: datetime) -> None:
        write_dial(render_day(config, now.date(), now=now), path)

    click.echo(f"Refreshing {path} every {config.refresh_seconds}s")
    click.echo("Press Ctrl+C to stop")
    run_clock(config, on_tick)


if __name__ == "__main__":
    main()
