"""Terminal confirmation step of a registration."""

from dataclasses import dataclass

from eventify_registration.domain.errors import InvalidTransactionIdError
from eventify_registration.domain.events import format_amount
from eventify_registration.domain.payment import ConfirmationView
from eventify_registration.services.events import EventService


@dataclass
class ConfirmationStep:
    """Builds the confirmation view from path identifiers alone."""

    event_service: EventService
    currency_symbol: str

    def render(self, event_id: int, transaction_id: str) -> ConfirmationView:
        """Return the confirmation for a completed registration."""
        if not transaction_id.strip():
            raise InvalidTransactionIdError
        event = self.event_service.get_event(event_id)
        return ConfirmationView(
            event_id=event.id,
            event_title=event.title,
            organizer_name=event.organizer_name,
            date=event.date,
            location=event.location,
            transaction_id=transaction_id,
            amount_label=format_amount(event.price, self.currency_symbol),
        )
