"""JSON file event source."""

import json
import logging
from datetime import date, timedelta
from pathlib import Path

from timepie.core.events import Event, filter_events_by_date, parse_events

from .errors import EventSourceError

logger = logging.getLogger(__name__)


class JsonFileEventSource:
    """
    Events read from a JSON array of event records.

    Implements EventSource protocol. The file is re-read on every call.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> list[Event]:
        if not self.path.exists():
            logger.info(f"No events file at {self.path}")
            return []
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise EventSourceError(f"Cannot read events from {self.path}: {e}") from e

        if not isinstance(data, list):
            raise EventSourceError(f"{self.path} must contain a JSON array of events")
        return parse_events([item for item in data if isinstance(item, dict)])

    def fetch_day(self, target_date: date) -> list[Event]:
        return filter_events_by_date(self._load(), target_date)

    def fetch_range(self, start_date: date, days: int) -> list[Event]:
        end_date = start_date + timedelta(days=days - 1)
        return [e for e in self._load() if start_date <= e.start_at.date() <= end_date]
