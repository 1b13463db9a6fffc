"""Project a day's events onto pie slices of the 24-hour dial.

Pure functions - no I/O.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from .dial import FULL_CIRCLE, time_to_angle
from .events import DialEvent, Event, EventType, normalize_event

logger = logging.getLogger(__name__)

NEUTRAL_COLOR = "#E5E7EB"


@dataclass(frozen=True)
class Slice:
    """One wedge of the dial: an event's duration or an uncovered gap."""

    start_angle: float
    end_angle: float
    color: str
    is_empty: bool
    event: DialEvent | None = None
    event_type: EventType | None = None


def _empty(start_angle: float, end_angle: float, color: str) -> Slice:
    return Slice(start_angle=start_angle, end_angle=end_angle, color=color, is_empty=True)


def event_to_slice(event: Event | DialEvent) -> Slice:
    """Occupied slice spanning an event's start and end times of day."""
    dial_event = normalize_event(event)
    return Slice(
        start_angle=time_to_angle(dial_event.start_at),
        end_angle=time_to_angle(dial_event.end_at),
        color=dial_event.color,
        is_empty=False,
        event=dial_event,
        event_type=dial_event.event_type,
    )


def build_slices(
    events: list[Event | DialEvent],
    empty_color: str = NEUTRAL_COLOR,
) -> list[Slice]:
    """
    Build a gap-filling sequence of slices for one day's events.

    Events are sorted by start timestamp and walked with a cursor from 0
    degrees; uncovered time becomes empty slices. Overlapping events are not
    merged and an event ending before it starts (overnight) keeps its
    backwards angles. Zero-length events still get a zero-width slice.
    Never raises for such input.
    """
    if not events:
        return [_empty(0.0, FULL_CIRCLE, empty_color)]

    ordered = sorted((normalize_event(e) for e in events), key=lambda e: e.start_at)

    slices: list[Slice] = []
    current_angle = 0.0

    for event in ordered:
        occupied = event_to_slice(event)

        if occupied.start_angle > current_angle:
            slices.append(_empty(current_angle, occupied.start_angle, empty_color))

        logger.debug(
            f"Event {event.title!r}: {occupied.start_angle:.2f} -> {occupied.end_angle:.2f}"
        )
        slices.append(occupied)
        current_angle = occupied.end_angle

    if current_angle < FULL_CIRCLE:
        slices.append(_empty(current_angle, FULL_CIRCLE, empty_color))

    logger.debug(f"build_slices: {len(events)} events -> {len(slices)} slices")
    return slices


def mid_angle(slice_: Slice) -> float:
    return (slice_.start_angle + slice_.end_angle) / 2


def slice_hour(slice_: Slice) -> int:
    """Hour of the day under the middle of a slice."""
    return math.floor(mid_angle(slice_) * 24 / FULL_CIRCLE)


def event_contains(event: DialEvent, now: datetime) -> bool:
    """
    Check if an event is running at `now`.

    An event whose end precedes its start is read as ending the next day;
    a `now` before such an event's start is moved a day forward as well.
    """
    start, end = event.start_at, event.end_at
    now = now.replace(tzinfo=None)
    if end < start:
        end += timedelta(days=1)
        if now < start:
            now += timedelta(days=1)
    return start <= now < end


def find_current_slice(slices: list[Slice], now: datetime) -> Slice | None:
    """First occupied slice whose event is running at `now`."""
    for s in slices:
        if s.event is not None and event_contains(s.event, now):
            return s
    return None
