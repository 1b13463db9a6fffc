"""Turn a clicked slice back into an event or an hour of the day."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime

from .dial import angle_to_time
from .events import DialEvent
from .slices import Slice, slice_hour


@dataclass(frozen=True)
class SliceClick:
    """What a slice click resolved to."""

    hour: int
    event: DialEvent | None = None

    @property
    def is_time_slot(self) -> bool:
        return self.event is None


def resolve_slice_click(slice_: Slice) -> SliceClick:
    return SliceClick(hour=slice_hour(slice_), event=slice_.event)


def dispatch_slice_click(
    slice_: Slice,
    on_event_click: Callable[[DialEvent], None] | None = None,
    on_time_slot_click: Callable[[int], None] | None = None,
) -> SliceClick:
    """
    Dispatch a click on a slice.

    Event slices go to on_event_click, empty slices to on_time_slot_click
    with the hour under the slice's middle. Missing callbacks are skipped.
    """
    click = resolve_slice_click(slice_)
    if click.event is not None:
        if on_event_click:
            on_event_click(click.event)
    elif slice_.is_empty and on_time_slot_click:
        on_time_slot_click(click.hour)
    return click


def time_slot_for_angle(angle: float, base_date: date | datetime) -> datetime:
    """Start time for an event created from a click at `angle`."""
    return angle_to_time(angle, base_date)
