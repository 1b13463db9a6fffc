"""Functional core - pure dial geometry with no I/O."""

from .dial import Point, time_to_angle, angle_to_time, polar_to_cartesian, describe_arc, hour_label_position
from .events import (
    AnchorEvent,
    DialEvent,
    Event,
    EventType,
    HardEvent,
    InvalidEventError,
    SoftEvent,
    event_from_dict,
    normalize_event,
    parse_events,
)
from .slices import Slice, build_slices, event_to_slice, find_current_slice, slice_hour
from .interaction import SliceClick, dispatch_slice_click, time_slot_for_angle
from .week import DayDial, build_week

__all__ = [
    # Dial
    "Point",
    "time_to_angle",
    "angle_to_time",
    "polar_to_cartesian",
    "describe_arc",
    "hour_label_position",
    # Events
    "AnchorEvent",
    "HardEvent",
    "SoftEvent",
    "Event",
    "DialEvent",
    "EventType",
    "InvalidEventError",
    "event_from_dict",
    "normalize_event",
    "parse_events",
    # Slices
    "Slice",
    "build_slices",
    "event_to_slice",
    "find_current_slice",
    "slice_hour",
    # Interaction
    "SliceClick",
    "dispatch_slice_click",
    "time_slot_for_angle",
    # Week
    "DayDial",
    "build_week",
]
