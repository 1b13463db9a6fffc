"""Adapters - I/O implementations of ports."""

from timepie.config import Config

from .errors import EventSourceError
from .http_events import HttpEventSource
from .json_file import JsonFileEventSource

__all__ = [
    "EventSourceError",
    "HttpEventSource",
    "JsonFileEventSource",
    "event_source_from_config",
]


def event_source_from_config(config: Config) -> HttpEventSource | JsonFileEventSource:
    """HTTP source when EVENTS_URL is set, else the JSON file."""
    if config.events_url:
        return HttpEventSource(config.events_url, token=config.api_token)
    return JsonFileEventSource(config.resolved_events_file())
