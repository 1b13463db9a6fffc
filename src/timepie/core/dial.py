"""Time <-> angle mapping on a 24-hour dial.

0 degrees is midnight at the top of the dial and angles grow clockwise:
06:00 is 90 (right), 12:00 is 180 (bottom), 18:00 is 270 (left).
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
FULL_CIRCLE = 360.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


def time_to_angle(value: datetime | time) -> float:
    """Angle of a time of day. Only hour and minute are read."""
    total_minutes = value.hour * 60 + value.minute
    angle = total_minutes / MINUTES_PER_DAY * FULL_CIRCLE
    logger.debug(f"time_to_angle: {value.hour}:{value.minute:02d} -> {angle:.2f}")
    return angle


def angle_to_time(angle: float, base_date: date | datetime) -> datetime:
    """
    Time of day at an angle, on base_date's date.

    The angle is wrapped into [0, 360) first, so negative angles work.
    Minutes are floored. A datetime base keeps its tzinfo.
    """
    normalized = angle % FULL_CIRCLE
    if normalized >= FULL_CIRCLE:
        # -1e-20 % 360 rounds up to 360.0
        normalized = 0.0
    # Multiply before dividing so quarter-degree angles stay exact.
    total_minutes = normalized * MINUTES_PER_DAY / FULL_CIRCLE
    hours = math.floor(total_minutes / 60)
    minutes = math.floor(total_minutes % 60)

    if isinstance(base_date, datetime):
        return base_date.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    return datetime.combine(base_date, time(hours, minutes))


def polar_to_cartesian(center_x: float, center_y: float, radius: float, angle_deg: float) -> Point:
    """Point on a circle, rotated -90 degrees so that angle 0 points up."""
    radians = (angle_deg - 90) * math.pi / 180
    return Point(
        x=center_x + radius * math.cos(radians),
        y=center_y + radius * math.sin(radians),
    )


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def describe_arc(x: float, y: float, radius: float, start_angle: float, end_angle: float) -> str:
    """
    SVG path for a filled wedge from start_angle clockwise to end_angle.

    Callers pass start_angle <= end_angle; a reversed pair is drawn as-is
    and picks the short arc. A span of a full turn or more becomes two half
    arcs, since an arc whose endpoints coincide draws nothing.
    """
    span = end_angle - start_angle
    start = polar_to_cartesian(x, y, radius, start_angle)
    r = _fmt(radius)

    if span >= FULL_CIRCLE:
        middle = polar_to_cartesian(x, y, radius, start_angle + 180)
        parts = [
            "M", _fmt(x), _fmt(y),
            "L", _fmt(start.x), _fmt(start.y),
            "A", r, r, "0", "0", "1", _fmt(middle.x), _fmt(middle.y),
            "A", r, r, "0", "0", "1", _fmt(start.x), _fmt(start.y),
            "Z",
        ]
        return " ".join(parts)

    end = polar_to_cartesian(x, y, radius, end_angle)
    large_arc_flag = "1" if span > 180 else "0"
    parts = [
        "M", _fmt(x), _fmt(y),
        "L", _fmt(start.x), _fmt(start.y),
        "A", r, r, "0", large_arc_flag, "1", _fmt(end.x), _fmt(end.y),
        "Z",
    ]
    return " ".join(parts)


def hour_label_position(hour: int, center_x: float, center_y: float, radius: float) -> Point:
    """Where to place the label for an hour of the day."""
    return polar_to_cartesian(center_x, center_y, radius, hour / 24 * FULL_CIRCLE)
