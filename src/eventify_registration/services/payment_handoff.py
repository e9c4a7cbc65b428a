"""State machine for handing a registration over to payment."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from eventify_registration.domain.errors import (
    DismissalRefusedError,
    InvalidTransitionError,
    PaymentGatewayError,
)
from eventify_registration.domain.payment import (
    IN_FLIGHT_STATES,
    CheckoutTicket,
    FailureStage,
    PaymentFailure,
    PaymentOrder,
    ProcessingState,
    Registrant,
    SubmitSignal,
)
from eventify_registration.domain.registration import RegistrationRequest
from eventify_registration.services.navigation import (
    Navigator,
    confirmation_path,
    payment_path,
)
from eventify_registration.services.notifications import (
    Notifier,
    error_notification,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_REASON = "Payment service is unavailable. Please try again."


class PaymentClient(Protocol):
    """Interface for the external payment provider."""

    async def begin_checkout(self, order: PaymentOrder) -> CheckoutTicket:
        """Hand an order to the provider and return its checkout ticket."""


@dataclass
class PaymentHandoff:
    """Single-writer state machine guarding one registration's payment.

    ``SUBMITTING`` covers the time before the provider has acknowledged the
    order; ``AWAITING_PAYMENT`` means the provider owns the transaction. Both
    lock the registration surface and refuse dismissal.
    """

    reference: str
    amount: Decimal
    currency: str
    payment_client: PaymentClient
    navigator: Navigator
    notifier: Notifier
    state: ProcessingState = ProcessingState.IDLE
    last_request: RegistrationRequest | None = None
    checkout: CheckoutTicket | None = None
    transaction_id: str | None = None
    failure: PaymentFailure | None = None
    history: list[ProcessingState] = field(default_factory=list)

    @property
    def controls_locked(self) -> bool:
        return self.state in IN_FLIGHT_STATES

    async def submit(self, request: RegistrationRequest) -> SubmitSignal:
        """Start a handoff; only one may run per registration at a time."""
        if self.state is not ProcessingState.IDLE:
            logger.info(
                "Submission ignored while %s",
                self.state.value,
                extra={"reference": self.reference},
            )
            return SubmitSignal.ALREADY_IN_FLIGHT

        self.last_request = request
        self.failure = None
        self.checkout = None
        self._transition(ProcessingState.SUBMITTING)
        order = PaymentOrder(
            reference=self.reference,
            event_id=request.event_id,
            amount=self.amount,
            currency=self.currency,
            registrant=Registrant(
                name=request.name,
                email=request.email,
                phone_number=request.phone_number,
                team_size=request.team_size,
            ),
        )
        try:
            ticket = await self.payment_client.begin_checkout(order)
        except PaymentGatewayError as exc:
            logger.warning(
                "Payment handoff failed",
                extra={"reference": self.reference, "reason": exc.message},
            )
            self._fail(exc.message, FailureStage.HANDOFF)
            return SubmitSignal.HANDOFF_FAILED
        except Exception:
            logger.exception(
                "Payment handoff crashed", extra={"reference": self.reference}
            )
            self._fail(UNAVAILABLE_REASON, FailureStage.HANDOFF)
            return SubmitSignal.HANDOFF_FAILED

        self.checkout = ticket
        self._transition(ProcessingState.AWAITING_PAYMENT)
        self.navigator.navigate(payment_path(request.event_id))
        return SubmitSignal.ACCEPTED

    def payment_succeeded(self, checkout_id: str, transaction_id: str) -> str:
        """Complete the registration and return the confirmation path."""
        self._require(ProcessingState.AWAITING_PAYMENT, "complete payment")
        self._require_checkout(checkout_id, "complete payment")
        self.transaction_id = transaction_id
        self._transition(ProcessingState.COMPLETED)
        path = confirmation_path(self._event_id(), transaction_id)
        self.navigator.navigate(path)
        return path

    def payment_failed(self, checkout_id: str, reason: str) -> None:
        """Record a failed payment reported by the provider."""
        self._require(ProcessingState.AWAITING_PAYMENT, "fail payment")
        self._require_checkout(checkout_id, "fail payment")
        self._fail(reason, FailureStage.PAYMENT)

    def acknowledge_failure(self) -> RegistrationRequest | None:
        """Return to idle after a failure, keeping the last request."""
        self._require(ProcessingState.FAILED, "acknowledge failure")
        self.failure = None
        self._transition(ProcessingState.IDLE)
        return self.last_request

    def cancel(self) -> None:
        """Abandon the handoff; refused while a submission is in flight."""
        if self.controls_locked:
            logger.warning(
                "Dismissal refused while %s",
                self.state.value,
                extra={"reference": self.reference},
            )
            raise DismissalRefusedError(self.state.value)
        if self.state is ProcessingState.FAILED:
            self._transition(ProcessingState.IDLE)

    def _fail(self, reason: str, stage: FailureStage) -> None:
        self.failure = PaymentFailure(reason=reason, stage=stage)
        self._transition(ProcessingState.FAILED)
        self.notifier.notify(error_notification("Payment Failed", reason))

    def _require(self, expected: ProcessingState, action: str) -> None:
        if self.state is not expected:
            raise InvalidTransitionError(action, self.state.value)

    def _require_checkout(self, checkout_id: str, action: str) -> None:
        if self.checkout is None or self.checkout.checkout_id != checkout_id:
            logger.warning(
                "Outcome for stale checkout %s",
                checkout_id,
                extra={"reference": self.reference},
            )
            raise InvalidTransitionError(action, "checkout is not current")

    def _event_id(self) -> int:
        if self.last_request is None:
            raise InvalidTransitionError("route payment", self.state.value)
        return self.last_request.event_id

    def _transition(self, target: ProcessingState) -> None:
        logger.info(
            "Payment handoff %s -> %s",
            self.state.value,
            target.value,
            extra={"reference": self.reference},
        )
        self.history.append(target)
        self.state = target
