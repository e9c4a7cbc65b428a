"""Event catalog lookups."""

from dataclasses import dataclass
from typing import Protocol

from eventify_registration.domain.errors import EventNotFoundError
from eventify_registration.domain.events import EventSummary


class EventRepository(Protocol):
    """Persistence interface for event summaries."""

    def get_event(self, event_id: int) -> EventSummary | None:
        """Return an event by id, if present."""


@dataclass
class EventService:
    """Application service for reading events."""

    repository: EventRepository

    def get_event(self, event_id: int) -> EventSummary:
        """Return an event or raise EventNotFoundError."""
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event
