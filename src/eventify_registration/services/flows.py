"""Registration flow instances and their registry."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from eventify_registration.domain.errors import (
    AuthRequiredError,
    ControlsLockedError,
    FlowNotFoundError,
)
from eventify_registration.domain.events import EventSummary
from eventify_registration.domain.notifications import Notification
from eventify_registration.domain.payment import ProcessingState, SubmitSignal
from eventify_registration.domain.registration import (
    DraftField,
    RegistrationDraft,
    ValidationResult,
)
from eventify_registration.domain.session import GateStatus, Session
from eventify_registration.services.navigation import RecordingNavigator
from eventify_registration.services.notifications import NotificationOutbox
from eventify_registration.services.payment_handoff import (
    PaymentClient,
    PaymentHandoff,
)
from eventify_registration.services.registration_form import (
    RegistrationFormController,
)
from eventify_registration.services.session_gate import SessionGate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of submitting the registration form."""

    signal: SubmitSignal | None
    validation: ValidationResult | None = None


@dataclass
class RegistrationFlow:
    """One open registration for one event on one UI surface.

    The first authenticated session to enter a flow owns it. Sessions of any
    other user are treated as if the flow did not exist.
    """

    id: UUID
    event: EventSummary
    gate: SessionGate
    form: RegistrationFormController
    handoff: PaymentHandoff
    outbox: NotificationOutbox
    navigator: RecordingNavigator
    owner_id: str | None = None
    expires_at: datetime | None = None
    closed: bool = False

    def enter(self, session: Session | None) -> GateStatus:
        """Re-evaluate the gate for the current session."""
        status = self.gate.evaluate(session)
        if session is not None:
            self._claim(session)
        return status

    def update_field(
        self, session: Session | None, field_name: DraftField, value: str | int
    ) -> RegistrationDraft:
        """Edit the draft; requires the owner's session and unlocked controls."""
        self.require_owner(session)
        if self.handoff.controls_locked:
            raise ControlsLockedError
        return self.form.update(field_name, value)

    async def submit(self, session: Session | None) -> SubmissionOutcome:
        """Validate the draft and hand it to payment."""
        if session is not None:
            self._claim(session)
        if self.handoff.state is not ProcessingState.IDLE:
            return SubmissionOutcome(signal=SubmitSignal.ALREADY_IN_FLIGHT)
        validation = self.form.validate(session)
        if validation.request is None:
            return SubmissionOutcome(signal=None, validation=validation)
        signal = await self.handoff.submit(validation.request)
        return SubmissionOutcome(signal=signal, validation=validation)

    def redirect_to_login(self) -> str:
        return self.gate.redirect_to_login(self)

    def redirect_to_sign_up(self) -> str:
        return self.gate.redirect_to_sign_up(self)

    def payment_succeeded(self, checkout_id: str, transaction_id: str) -> str:
        """Finish the flow; the draft is not needed past this point."""
        path = self.handoff.payment_succeeded(checkout_id, transaction_id)
        self.form.draft = RegistrationDraft()
        return path

    def payment_failed(self, checkout_id: str, reason: str) -> None:
        self.handoff.payment_failed(checkout_id, reason)

    def acknowledge_failure(self, session: Session | None) -> RegistrationDraft:
        """Return to the editable form with the draft intact."""
        self.require_owner(session)
        self.handoff.acknowledge_failure()
        return self.form.draft

    def dismiss(self, session: Session | None) -> None:
        """Close the surface unless a payment is in flight."""
        self.require_owner(session)
        self.close()

    def close(self) -> None:
        self.handoff.cancel()
        self.form.draft = RegistrationDraft()
        self.closed = True

    def drain_notifications(self) -> list[Notification]:
        return self.outbox.drain()

    def take_redirect(self) -> str | None:
        return self.navigator.take()

    def require_owner(self, session: Session | None) -> None:
        """Raise unless the session belongs to the flow's owner."""
        if self.enter(session) is GateStatus.UNAUTHENTICATED:
            raise AuthRequiredError

    def _claim(self, session: Session) -> None:
        if self.owner_id is None:
            self.owner_id = session.user_id
        elif self.owner_id != session.user_id:
            logger.warning(
                "Registration requested by another user",
                extra={"flow_id": str(self.id)},
            )
            raise FlowNotFoundError(str(self.id))


@dataclass
class FlowRegistry:
    """In-memory registry of open registration flows.

    Only flows entered with a session are kept. Idle flows expire after
    ``ttl_seconds`` without a request; flows with a payment in flight never
    expire.
    """

    payment_client: PaymentClient
    currency: str
    ttl_seconds: int = 1800
    flows: dict[UUID, RegistrationFlow] = field(default_factory=dict)

    def open(self, event: EventSummary, session: Session | None) -> RegistrationFlow:
        """Open a flow for an event; it is registered only for a session."""
        self._purge_expired()
        flow = self.detached(event)
        if flow.enter(session) is GateStatus.UNAUTHENTICATED:
            return flow
        self.flows[flow.id] = flow
        self._touch(flow)
        logger.info(
            "Registration opened",
            extra={"flow_id": str(flow.id), "event_id": event.id},
        )
        return flow

    def detached(self, event: EventSummary) -> RegistrationFlow:
        """Build a flow that is not kept by the registry."""
        flow_id = uuid4()
        outbox = NotificationOutbox()
        navigator = RecordingNavigator()
        return RegistrationFlow(
            id=flow_id,
            event=event,
            gate=SessionGate(navigator),
            form=RegistrationFormController(event=event, notifier=outbox),
            handoff=PaymentHandoff(
                reference=str(flow_id),
                amount=event.price,
                currency=self.currency,
                payment_client=self.payment_client,
                navigator=navigator,
                notifier=outbox,
            ),
            outbox=outbox,
            navigator=navigator,
        )

    def get(self, flow_id: UUID) -> RegistrationFlow:
        """Return an open flow or raise FlowNotFoundError."""
        flow = self.flows.get(flow_id)
        if flow is None or flow.closed:
            raise FlowNotFoundError(str(flow_id))
        if _expired(flow, datetime.now(tz=UTC)):
            self.discard(flow_id)
            raise FlowNotFoundError(str(flow_id))
        self._touch(flow)
        return flow

    def get_by_reference(self, reference: str) -> RegistrationFlow:
        """Return the flow a payment reference belongs to."""
        try:
            flow_id = UUID(reference)
        except ValueError as exc:
            raise FlowNotFoundError(reference) from exc
        return self.get(flow_id)

    def discard(self, flow_id: UUID) -> None:
        """Forget a flow once its surface is gone."""
        self.flows.pop(flow_id, None)

    def _touch(self, flow: RegistrationFlow) -> None:
        flow.expires_at = datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)

    def _purge_expired(self) -> None:
        now = datetime.now(tz=UTC)
        for flow_id, flow in list(self.flows.items()):
            if flow.closed or _expired(flow, now):
                self.discard(flow_id)
                logger.info("Registration expired", extra={"flow_id": str(flow_id)})


def _expired(flow: RegistrationFlow, now: datetime) -> bool:
    if flow.handoff.controls_locked or flow.expires_at is None:
        return False
    return now >= flow.expires_at
