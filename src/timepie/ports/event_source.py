"""Event source interface."""

from datetime import date
from typing import Protocol

from timepie.core.events import Event


class EventSource(Protocol):
    """Interface for fetching a day's events from any backend."""

    def fetch_day(self, target_date: date) -> list[Event]:
        """Fetch events starting on a specific date."""
        ...

    def fetch_range(self, start_date: date, days: int) -> list[Event]:
        """Fetch events for `days` consecutive days from start_date."""
        ...
