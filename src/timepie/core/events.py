"""Pure event domain logic - no I/O dependencies."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class InvalidEventError(ValueError):
    """Raised when an event record cannot be turned into an Event."""


class EventType(str, Enum):
    ANCHOR = "anchor"
    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class Purpose:
    """What an event is for, with the color used when the event has none."""

    key: str
    label: str
    color: str


PURPOSES: dict[str, Purpose] = {
    p.key: p
    for p in [
        Purpose("sleep", "Sleep", "#34495E"),
        Purpose("meal", "Meal", "#F39C12"),
        Purpose("personal", "Personal", "#2ECC71"),
        Purpose("work", "Work", "#4A90D9"),
        Purpose("meeting", "Meeting", "#9B59B6"),
        Purpose("appointment", "Appointment", "#E67E22"),
        Purpose("commute", "Commute", "#95A5A6"),
        Purpose("exercise", "Exercise", "#E74C3C"),
        Purpose("study", "Study", "#3498DB"),
        Purpose("hobby", "Hobby", "#1ABC9C"),
        Purpose("other", "Other", "#7F8C8D"),
    ]
}

PURPOSES_BY_TYPE: dict[EventType, list[str]] = {
    EventType.ANCHOR: ["sleep", "meal", "personal"],
    EventType.HARD: ["work", "meeting", "appointment", "commute"],
    EventType.SOFT: ["exercise", "study", "hobby", "other"],
}

TYPE_COLORS: dict[EventType, str] = {
    EventType.ANCHOR: "#34495E",
    EventType.HARD: "#4A90D9",
    EventType.SOFT: "#1ABC9C",
}

PREFERRED_WINDOWS: dict[str, tuple[str, str]] = {
    "morning": ("06:00", "12:00"),
    "afternoon": ("12:00", "18:00"),
    "evening": ("18:00", "22:00"),
    "night": ("22:00", "06:00"),
}


@dataclass
class BaseEvent:
    """Fields shared by every event variant."""

    id: str
    title: str
    start_at: datetime
    end_at: datetime
    color: str = ""
    purpose: str | None = None

    @property
    def event_type(self) -> EventType:
        raise NotImplementedError

    def format_range(self) -> str:
        """Format the event time range for display."""
        return f"{self.start_at.strftime('%H:%M')}-{self.end_at.strftime('%H:%M')}"


@dataclass
class AnchorEvent(BaseEvent):
    """A fixed daily block (sleep, meals). Repeat days are informational only."""

    repeat_days: list[int] = field(default_factory=list)

    @property
    def event_type(self) -> EventType:
        return EventType.ANCHOR


@dataclass
class HardEvent(BaseEvent):
    """A rigid calendar block."""

    location: str = ""
    reminder_min: int | None = None

    @property
    def event_type(self) -> EventType:
        return EventType.HARD


@dataclass
class SoftEvent(BaseEvent):
    """A flexible, goal-based slot."""

    preferred_window: str | None = None

    @property
    def event_type(self) -> EventType:
        return EventType.SOFT


Event = AnchorEvent | HardEvent | SoftEvent


@dataclass(frozen=True)
class DialEvent:
    """The minimal event shape the slice builder works with."""

    id: str
    title: str
    start_at: datetime
    end_at: datetime
    color: str
    event_type: EventType


_TZ_SUFFIX = re.compile(r"(\.\d+)?(Z|[+-]\d{2}:?\d{2})?$")


def parse_local_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp as local wall-clock time.

    Fractional seconds and any UTC offset are discarded rather than converted,
    so "2024-02-16T12:00:00.000Z" reads as 12:00.
    """
    cleaned = _TZ_SUFFIX.sub("", value.strip(), count=1)
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError as e:
        raise InvalidEventError(f"Unparseable timestamp {value!r}") from e


def resolve_color(event: Event) -> str:
    """Explicit color, else the purpose color, else the type fallback."""
    if event.color:
        return event.color
    if event.purpose and event.purpose in PURPOSES:
        return PURPOSES[event.purpose].color
    return TYPE_COLORS[event.event_type]


def normalize_event(event: Event | DialEvent) -> DialEvent:
    """Reduce any event variant to the shape the slice builder needs."""
    if isinstance(event, DialEvent):
        return event
    return DialEvent(
        id=event.id,
        title=event.title,
        start_at=event.start_at.replace(tzinfo=None),
        end_at=event.end_at.replace(tzinfo=None),
        color=resolve_color(event),
        event_type=event.event_type,
    )


def _as_datetime(value: str | datetime, field_name: str) -> datetime:
    if isinstance(value, datetime):
        # Wall clock only, same as parsed strings.
        return value.replace(tzinfo=None)
    if not isinstance(value, str):
        raise InvalidEventError(f"{field_name} must be a timestamp string, got {value!r}")
    return parse_local_datetime(value)


def event_from_dict(data: dict) -> Event:
    """
    Build an event variant from a raw record.

    Records without an event_type are treated as hard events. Raises
    InvalidEventError when required fields are missing or unparseable.
    """
    try:
        start_at = _as_datetime(data["start_at"], "start_at")
        end_at = _as_datetime(data["end_at"], "end_at")
    except KeyError as e:
        raise InvalidEventError(f"Missing field {e.args[0]!r}") from e

    raw_type = data.get("event_type") or EventType.HARD.value
    try:
        event_type = EventType(raw_type)
    except ValueError as e:
        raise InvalidEventError(f"Unknown event_type {raw_type!r}") from e

    event_id = str(data.get("id", ""))
    purpose = data.get("purpose")
    if purpose and purpose not in PURPOSES_BY_TYPE[event_type]:
        logger.warning(f"Event {event_id}: purpose {purpose!r} does not belong to {event_type.value} events, dropping it")
        purpose = None

    common = dict(
        id=event_id,
        title=str(data.get("title") or ""),
        start_at=start_at,
        end_at=end_at,
        color=data.get("color") or "",
        purpose=purpose,
    )

    match event_type:
        case EventType.ANCHOR:
            return AnchorEvent(**common, repeat_days=list(data.get("repeat_days") or []))
        case EventType.HARD:
            return HardEvent(
                **common,
                location=data.get("location") or "",
                reminder_min=data.get("reminder_min"),
            )
        case EventType.SOFT:
            window = data.get("preferred_window")
            if window and window not in PREFERRED_WINDOWS:
                logger.warning(f"Event {event_id}: unknown preferred_window {window!r}, dropping it")
                window = None
            return SoftEvent(**common, preferred_window=window)


def parse_events(records: list[dict]) -> list[Event]:
    """Parse raw records, skipping the ones that cannot be read."""
    events = []
    for record in records:
        try:
            events.append(event_from_dict(record))
        except InvalidEventError as e:
            logger.warning(f"Skipping event {record.get('id', '?')}: {e}")
    return events


def filter_events_by_date(events: list[Event], target_date: date) -> list[Event]:
    """Keep events whose start falls on target_date."""
    return [e for e in events if e.start_at.date() == target_date]
