"""Supabase-backed event repository."""

from dataclasses import dataclass
from decimal import Decimal

from supabase import Client

from eventify_registration.domain.events import EventSummary
from eventify_registration.services.events import EventRepository

_EVENT_COLUMNS = (
    "id, title, description, organizer, date, location, participants, price, "
    "image, category"
)


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for event lookups."""

    client: Client

    def get_event(self, event_id: int) -> EventSummary | None:
        """Return an event by id, if present."""
        response = (
            self.client.table("events")
            .select(_EVENT_COLUMNS)
            .eq("id", event_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return EventSummary(
            id=int(row["id"]),
            title=row["title"],
            description=row.get("description") or "",
            organizer_name=row.get("organizer") or "",
            date=str(row.get("date") or ""),
            location=row.get("location") or "",
            participant_count=int(row.get("participants") or 0),
            price=Decimal(str(row.get("price") or 0)),
            image_ref=row.get("image") or "",
            category=row.get("category"),
        )
