"""HTTP event source - fetches event records from a JSON API."""

import logging
from datetime import date, timedelta

import requests

from timepie.core.events import Event, filter_events_by_date, parse_events

from .errors import EventSourceError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


class HttpEventSource:
    """
    Events served by an HTTP endpoint as a JSON array.

    Implements EventSource protocol. Sends `?date=YYYY-MM-DD` and, when a
    token is configured, a bearer Authorization header. No business logic -
    just I/O.
    """

    def __init__(self, url: str, token: str = "", session: requests.Session | None = None):
        self.url = url
        self.token = token
        self._session = session or requests.Session()

    def _get(self, params: dict) -> list[dict]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self._session.get(self.url, params=params, headers=headers, timeout=REQUEST_TIMEOUT)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise EventSourceError(f"Event request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise EventSourceError(f"Invalid JSON from {self.url}") from e

        if not isinstance(data, list):
            raise EventSourceError(f"Expected a JSON array from {self.url}")
        return [item for item in data if isinstance(item, dict)]

    def fetch_day(self, target_date: date) -> list[Event]:
        records = self._get({"date": target_date.isoformat()})
        logger.debug(f"Fetched {len(records)} records for {target_date}")
        return filter_events_by_date(parse_events(records), target_date)

    def fetch_range(self, start_date: date, days: int) -> list[Event]:
        events = []
        for offset in range(days):
            events.extend(self.fetch_day(start_date + timedelta(days=offset)))
        return events
