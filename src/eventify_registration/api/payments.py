"""Payment provider webhook and confirmation endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from eventify_registration.api.models import ConfirmationResponse, PaymentWebhook
from eventify_registration.domain.errors import InvalidTransitionError

if TYPE_CHECKING:
    from eventify_registration.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def _get_webhook_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.payment_webhook_token


async def require_webhook_token(
    x_webhook_token: str | None = Header(default=None),
    webhook_token: str = Depends(_get_webhook_token),
) -> None:
    """Ensure webhook calls carry the shared provider token."""
    if not x_webhook_token or x_webhook_token != webhook_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/payments/webhook", dependencies=[Depends(require_webhook_token)])
async def payment_webhook(payload: PaymentWebhook, request: Request) -> dict[str, str]:
    """Feed a payment outcome back into its registration flow."""
    container: AppContainer = request.app.state.container
    flow = container.flow_registry.get_by_reference(payload.reference)
    if payload.status == "succeeded" and not payload.transaction_id:
        raise HTTPException(
            status_code=422,
            detail="transaction_id is required",
        )
    try:
        if payload.status == "succeeded":
            path = flow.payment_succeeded(
                payload.checkout_id, payload.transaction_id or ""
            )
            logger.info(
                "Payment completed",
                extra={"reference": payload.reference, "path": path},
            )
        else:
            flow.payment_failed(
                payload.checkout_id, payload.reason or "Payment was not completed"
            )
    except InvalidTransitionError:
        logger.warning(
            "Payment outcome rejected",
            extra={
                "reference": payload.reference,
                "checkout_id": payload.checkout_id,
                "status": payload.status,
            },
        )
        raise
    return {"status": "ok"}


@router.get("/registration-success/{event_id}/{transaction_id}")
async def registration_success(
    event_id: int, transaction_id: str, request: Request
) -> ConfirmationResponse:
    """Confirmation page data, safe to reload from the URL alone."""
    container: AppContainer = request.app.state.container
    view = container.confirmation_step.render(event_id, transaction_id)
    return ConfirmationResponse(
        event_id=view.event_id,
        event_title=view.event_title,
        organizer=view.organizer_name,
        date=view.date,
        location=view.location,
        transaction_id=view.transaction_id,
        amount=view.amount_label,
    )
