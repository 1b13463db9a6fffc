"""SVG rendering of a day dial."""

from dataclasses import dataclass
from datetime import datetime
from html import escape

from .core.dial import describe_arc, hour_label_position, polar_to_cartesian, time_to_angle
from .core.events import EventType
from .core.slices import Slice, find_current_slice, slice_hour

HOUR_LABELS = [6, 12, 18, 0]
TITLE_MAX_CHARS = 12


@dataclass
class DialOptions:
    """Sizing and toggles for a rendered dial."""

    size: int = 300
    inner_ratio: float = 0.35
    show_labels: bool = True
    show_current_time: bool = True
    show_center_info: bool = True
    stroke_color: str = "#1F2937"

    @property
    def center(self) -> float:
        return self.size / 2

    @property
    def outer_radius(self) -> float:
        return self.size / 2 - 10

    @property
    def inner_radius(self) -> float:
        return self.outer_radius * self.inner_ratio

    @property
    def label_radius(self) -> float:
        return self.outer_radius + 20


def slice_opacity(slice_: Slice) -> float:
    if slice_.is_empty:
        return 0.3
    if slice_.event_type == EventType.ANCHOR:
        return 0.6
    return 0.9


def slice_label(slice_: Slice) -> str:
    """Accessible label for a slice."""
    if slice_.event is not None:
        return f"{slice_.event.title} event"
    return f"Empty time slot at {slice_hour(slice_)}:00"


def truncate_title(title: str, limit: int = TITLE_MAX_CHARS) -> str:
    return title[:limit] + "..." if len(title) > limit else title


def _render_slice(slice_: Slice, options: DialOptions) -> str:
    c = options.center
    path = describe_arc(c, c, options.outer_radius, slice_.start_angle, slice_.end_angle)
    stroke_width = 1 if slice_.event_type == EventType.ANCHOR else 2
    event_id = f' data-event-id="{escape(slice_.event.id)}"' if slice_.event else ""
    return (
        f'<path d="{path}" fill="{escape(slice_.color)}" stroke="{options.stroke_color}" '
        f'stroke-width="{stroke_width}" opacity="{slice_opacity(slice_)}" '
        f'data-hour="{slice_hour(slice_)}"{event_id}>'
        f"<title>{escape(slice_label(slice_))}</title></path>"
    )


def _render_labels(options: DialOptions) -> list[str]:
    c = options.center
    lines = []
    for hour in HOUR_LABELS:
        pos = hour_label_position(hour, c, c, options.label_radius)
        lines.append(
            f'<text x="{pos.x:.2f}" y="{pos.y:.2f}" text-anchor="middle" '
            f'dominant-baseline="middle" font-size="12">{hour:02d}</text>'
        )
    return lines


def _render_needle(current_time: datetime, options: DialOptions) -> list[str]:
    c = options.center
    tip = polar_to_cartesian(c, c, options.outer_radius - 5, time_to_angle(current_time))
    color = options.stroke_color
    return [
        f'<line x1="{c}" y1="{c}" x2="{tip.x:.2f}" y2="{tip.y:.2f}" stroke="{color}" '
        f'stroke-width="4" stroke-linecap="round"/>',
        f'<circle cx="{c}" cy="{c}" r="8" fill="{color}"/>',
        f'<circle cx="{tip.x:.2f}" cy="{tip.y:.2f}" r="6" fill="{color}"/>',
    ]


def _render_center(slices: list[Slice], current_time: datetime, options: DialOptions) -> list[str]:
    c = options.center
    lines = [
        f'<text x="{c}" y="{c - 30}" text-anchor="middle" font-size="10">CURRENT</text>',
        f'<text x="{c}" y="{c - 5}" text-anchor="middle" font-size="32" '
        f'font-weight="bold">{current_time.strftime("%H:%M")}</text>',
    ]
    current = find_current_slice(slices, current_time)
    if current is not None and current.event is not None:
        lines.append(
            f'<text x="{c}" y="{c + 25}" text-anchor="middle" font-size="11">'
            f"{escape(truncate_title(current.event.title))}</text>"
        )
    return lines


def render_dial(
    slices: list[Slice],
    options: DialOptions | None = None,
    current_time: datetime | None = None,
) -> str:
    """
    Render slices as a standalone SVG document.

    Slices are drawn in list order, so later overlapping slices sit on top.
    The needle and center caption need current_time; without it they are
    left out.
    """
    options = options or DialOptions()
    c = options.center
    box = options.size + 50

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{box}" height="{box}" '
        f'viewBox="-25 -25 {box} {box}">'
    ]
    lines.extend(_render_slice(s, options) for s in slices)
    lines.append(f'<circle cx="{c}" cy="{c}" r="{options.inner_radius:.2f}" fill="#FFFFFF"/>')

    if current_time is not None and options.show_center_info:
        lines.extend(_render_center(slices, current_time, options))
    if current_time is not None and options.show_current_time:
        lines.extend(_render_needle(current_time, options))
    if options.show_labels:
        lines.extend(_render_labels(options))

    lines.append("</svg>")
    return "\n".join(lines)
