"""Shared workflow layer - wires event sources, the core and rendering."""

import logging
from datetime import date, datetime
from pathlib import Path

from .adapters import event_source_from_config
from .config import Config
from .core.slices import Slice, build_slices
from .core.week import DayDial, build_week, week_start_for
from .ports import EventSource
from .render import DialOptions, render_dial

logger = logging.getLogger(__name__)


def dial_options(config: Config, size: int | None = None) -> DialOptions:
    return DialOptions(
        size=size or config.dial_size,
        show_labels=config.show_labels,
        show_current_time=config.show_current_time,
        show_center_info=config.show_center_info,
    )


def day_slices(config: Config, target_date: date, source: EventSource | None = None) -> list[Slice]:
    """Fetch a day's events and project them onto slices."""
    source = source or event_source_from_config(config)
    events = source.fetch_day(target_date)
    logger.info(f"{len(events)} events on {target_date}")
    return build_slices(events, empty_color=config.empty_color)


def week_dials(config: Config, day: date, source: EventSource | None = None) -> list[DayDial]:
    """Dials for the ISO week containing day."""
    source = source or event_source_from_config(config)
    week_start = week_start_for(day)
    events = source.fetch_range(week_start, 7)
    return build_week(events, week_start, empty_color=config.empty_color)


def render_day(
    config: Config,
    target_date: date,
    now: datetime | None = None,
    size: int | None = None,
    source: EventSource | None = None,
) -> str:
    """
    Render a day's dial as SVG.

    The needle and center caption are only drawn when `now` falls on
    target_date.
    """
    slices = day_slices(config, target_date, source)
    current_time = now if now is not None and now.date() == target_date else None
    return render_dial(slices, dial_options(config, size), current_time=current_time)


def write_dial(svg: str, output: Path) -> Path:
    """Write an SVG document, creating parent directories."""
    output = output.expanduser()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(svg)
    return output


def default_output_path(config: Config, target_date: date) -> Path:
    return config.resolved_output_dir() / f"{target_date.isoformat()}.svg"
