"""Domain models for events shown in the registration flow."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class EventSummary:
    """Snapshot of an event handed into a registration flow."""

    id: int
    title: str
    description: str
    organizer_name: str
    date: str
    location: str
    participant_count: int
    price: Decimal
    image_ref: str
    category: str | None = None

    @property
    def category_label(self) -> str:
        return self.category or "Event"


def format_amount(amount: Decimal, currency_symbol: str) -> str:
    """Format an amount with a fixed currency symbol prefix."""
    if amount == amount.to_integral_value():
        return f"{currency_symbol}{int(amount)}"
    return f"{currency_symbol}{amount:.2f}"
