"""Seven independent day dials for a week view."""

from dataclasses import dataclass
from datetime import date, timedelta

from .events import Event, filter_events_by_date
from .slices import NEUTRAL_COLOR, Slice, build_slices


@dataclass
class DayDial:
    """One day of a week view."""

    date: date
    events: list[Event]
    slices: list[Slice]

    @property
    def event_count(self) -> int:
        return len(self.events)


def week_start_for(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())


def build_week(
    events: list[Event],
    week_start: date,
    empty_color: str = NEUTRAL_COLOR,
) -> list[DayDial]:
    """
    Build a dial for each of the seven days from week_start.

    Events belong to the day their start_at falls on. Recurring events must
    already be materialized by the caller.
    """
    dials = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        day_events = filter_events_by_date(events, day)
        dials.append(DayDial(date=day, events=day_events, slices=build_slices(day_events, empty_color)))
    return dials
