"""Registration flow endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, Request, status

from eventify_registration.api.models import (
    DraftUpdateRequest,
    EventOut,
    FailureOut,
    FlowResponse,
    IssueOut,
    NotificationOut,
    TeamSizeOption,
)
from eventify_registration.domain.events import format_amount
from eventify_registration.domain.payment import ProcessingState
from eventify_registration.domain.registration import TEAM_SIZE_OPTIONS
from eventify_registration.domain.session import GateStatus, Session

if TYPE_CHECKING:
    from eventify_registration.containers import AppContainer
    from eventify_registration.services.flows import (
        RegistrationFlow,
        SubmissionOutcome,
    )

router = APIRouter(tags=["registrations"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_session(
    request: Request, authorization: str | None = Header(default=None)
) -> Session | None:
    """Resolve the caller's session on every request."""
    container = _container(request)
    return container.identity_client.current_session(_bearer_token(authorization))


@router.post(
    "/events/{event_id}/registrations", status_code=status.HTTP_201_CREATED
)
async def open_registration(
    event_id: int,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Open a registration flow for an event.

    Without a session nothing is kept and the response carries no flow id.
    """
    container = _container(request)
    event = container.event_service.get_event(event_id)
    flow = container.flow_registry.open(event, session)
    return _flow_response(container, flow, flow.enter(session))


@router.post("/events/{event_id}/registrations/login")
async def login_to_register(event_id: int, request: Request) -> FlowResponse:
    """Leave the registration gate for the login page."""
    return _leave_gate(_container(request), event_id, sign_up=False)


@router.post("/events/{event_id}/registrations/signup")
async def sign_up_to_register(event_id: int, request: Request) -> FlowResponse:
    """Leave the registration gate for the sign-up page."""
    return _leave_gate(_container(request), event_id, sign_up=True)


@router.get("/registrations/{flow_id}")
async def get_registration(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Re-enter a flow; the gate is evaluated again.

    A completed flow is forgotten once its confirmation target is delivered.
    """
    container = _container(request)
    flow = container.flow_registry.get(flow_id)
    response = _flow_response(container, flow, flow.enter(session))
    if flow.handoff.state is ProcessingState.COMPLETED:
        container.flow_registry.discard(flow_id)
    return response


@router.patch("/registrations/{flow_id}/draft")
async def update_draft(
    flow_id: UUID,
    payload: DraftUpdateRequest,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Edit one field of the registration draft."""
    container = _container(request)
    flow = container.flow_registry.get(flow_id)
    flow.update_field(session, payload.field, payload.value)
    return _flow_response(container, flow, GateStatus.AUTHENTICATED)


@router.post("/registrations/{flow_id}/submit")
async def submit_registration(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Validate the draft and hand it over to payment."""
    container = _container(request)
    flow = container.flow_registry.get(flow_id)
    outcome = await flow.submit(session)
    return _flow_response(container, flow, flow.enter(session), outcome)


@router.post("/registrations/{flow_id}/acknowledge")
async def acknowledge_failure(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Dismiss a payment failure and return to the form."""
    container = _container(request)
    flow = container.flow_registry.get(flow_id)
    flow.acknowledge_failure(session)
    return _flow_response(container, flow, GateStatus.AUTHENTICATED)


@router.post("/registrations/{flow_id}/login")
async def redirect_to_login(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Close the owner's flow and go to the login page."""
    return _leave(_container(request), flow_id, session, sign_up=False)


@router.post("/registrations/{flow_id}/signup")
async def redirect_to_sign_up(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> FlowResponse:
    """Close the owner's flow and go to the sign-up page."""
    return _leave(_container(request), flow_id, session, sign_up=True)


@router.delete("/registrations/{flow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_registration(
    flow_id: UUID,
    request: Request,
    session: Session | None = Depends(current_session),
) -> None:
    """Close the flow; refused while a payment is in flight."""
    container = _container(request)
    flow = container.flow_registry.get(flow_id)
    flow.dismiss(session)
    container.flow_registry.discard(flow_id)


def _leave(
    container: AppContainer,
    flow_id: UUID,
    session: Session | None,
    *,
    sign_up: bool,
) -> FlowResponse:
    flow = container.flow_registry.get(flow_id)
    flow.require_owner(session)
    _redirect(flow, sign_up=sign_up)
    response = _flow_response(container, flow, GateStatus.UNAUTHENTICATED)
    container.flow_registry.discard(flow_id)
    return response


def _leave_gate(container: AppContainer, event_id: int, *, sign_up: bool) -> FlowResponse:
    event = container.event_service.get_event(event_id)
    flow = container.flow_registry.detached(event)
    _redirect(flow, sign_up=sign_up)
    return _flow_response(container, flow, GateStatus.UNAUTHENTICATED)


def _redirect(flow: RegistrationFlow, *, sign_up: bool) -> None:
    if sign_up:
        flow.redirect_to_sign_up()
    else:
        flow.redirect_to_login()


def _flow_response(
    container: AppContainer,
    flow: RegistrationFlow,
    gate: GateStatus,
    outcome: SubmissionOutcome | None = None,
) -> FlowResponse:
    symbol = container.settings.currency_symbol
    price_label = format_amount(flow.event.price, symbol)
    handoff = flow.handoff
    issues: list[IssueOut] = []
    if outcome is not None and outcome.validation is not None:
        issues = [
            IssueOut(
                code=issue.code.value,
                message=issue.message,
                fields=list(issue.fields),
            )
            for issue in outcome.validation.issues
        ]
    authenticated = gate is GateStatus.AUTHENTICATED and not flow.closed
    payment_url = None
    if handoff.checkout and handoff.state is ProcessingState.AWAITING_PAYMENT:
        payment_url = handoff.checkout.payment_url
    return FlowResponse(
        flow_id=str(flow.id) if flow.owner_id else None,
        gate=gate.value,
        state=handoff.state.value,
        controls_locked=handoff.controls_locked,
        event=EventOut(
            id=flow.event.id,
            title=flow.event.title,
            description=flow.event.description,
            organizer=flow.event.organizer_name,
            date=flow.event.date,
            location=flow.event.location,
            participants=flow.event.participant_count,
            price=price_label,
            image=flow.event.image_ref,
            category=flow.event.category_label,
        ),
        price_label=price_label,
        submit_label=(
            "Processing..."
            if handoff.controls_locked
            else f"Proceed to Payment ({price_label})"
        ),
        team_size_options=[
            TeamSizeOption(value=value, label=label)
            for value, label in TEAM_SIZE_OPTIONS.items()
        ],
        draft=flow.form.draft.as_dict() if authenticated else None,
        signal=outcome.signal.value if outcome and outcome.signal else None,
        issues=issues,
        notifications=[
            NotificationOut(
                title=item.title,
                description=item.description,
                severity=item.severity.value,
            )
            for item in flow.drain_notifications()
        ],
        payment_url=payment_url,
        redirect_to=flow.take_redirect(),
        failure=(
            FailureOut(
                reason=handoff.failure.reason,
                stage=handoff.failure.stage.value,
            )
            if handoff.failure
            else None
        ),
    )


def _bearer_token(header: str | None) -> str | None:
    """Extract the token from an Authorization header."""
    if header is None:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
