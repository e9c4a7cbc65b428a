"""Domain models for the payment handoff."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ProcessingState(Enum):
    """States of a payment handoff."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_PAYMENT = "awaiting_payment"
    COMPLETED = "completed"
    FAILED = "failed"


IN_FLIGHT_STATES = frozenset(
    {ProcessingState.SUBMITTING, ProcessingState.AWAITING_PAYMENT}
)


class SubmitSignal(Enum):
    """What happened to a submit call."""

    ACCEPTED = "accepted"
    ALREADY_IN_FLIGHT = "already_in_flight"
    HANDOFF_FAILED = "handoff_failed"


class FailureStage(Enum):
    """Where a payment attempt failed."""

    HANDOFF = "handoff"
    PAYMENT = "payment"


@dataclass(frozen=True)
class Registrant:
    """Registrant identity sent to the payment provider."""

    name: str
    email: str
    phone_number: str
    team_size: int


@dataclass(frozen=True)
class PaymentOrder:
    """Data handed across the payment boundary."""

    reference: str
    event_id: int
    amount: Decimal
    currency: str
    registrant: Registrant


@dataclass(frozen=True)
class CheckoutTicket:
    """Acknowledgement that the payment provider owns the transaction."""

    checkout_id: str
    payment_url: str | None = None


@dataclass(frozen=True)
class PaymentFailure:
    """Reason a handoff or payment did not complete."""

    reason: str
    stage: FailureStage


@dataclass(frozen=True)
class ConfirmationView:
    """Terminal view of a completed registration."""

    event_id: int
    event_title: str
    organizer_name: str
    date: str
    location: str
    transaction_id: str
    amount_label: str
