"""Pydantic models for the HTTP surface."""

from typing import Literal

from pydantic import BaseModel, Field

from eventify_registration.domain.registration import DraftField


class LoginRequest(BaseModel):
    """Login form payload."""

    email: str = ""
    password: str = ""


class SignUpRequest(BaseModel):
    """Sign-up form payload."""

    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field(default="", alias="confirmPassword")

    model_config = {"populate_by_name": True}


class DraftUpdateRequest(BaseModel):
    """Single field edit of a registration draft."""

    field: DraftField
    value: str | int


class PaymentWebhook(BaseModel):
    """Outcome reported by the payment provider."""

    reference: str
    checkout_id: str
    status: Literal["succeeded", "failed"]
    transaction_id: str | None = None
    reason: str | None = None


class NotificationOut(BaseModel):
    title: str
    description: str
    severity: str


class IssueOut(BaseModel):
    code: str
    message: str
    fields: list[str] = []


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    organizer: str
    date: str
    location: str
    participants: int
    price: str
    image: str
    category: str


class TeamSizeOption(BaseModel):
    value: int
    label: str


class FailureOut(BaseModel):
    reason: str
    stage: str


class FlowResponse(BaseModel):
    """Presentation state of a registration flow."""

    flow_id: str | None
    gate: str
    state: str
    controls_locked: bool
    event: EventOut
    price_label: str
    submit_label: str
    team_size_options: list[TeamSizeOption]
    draft: dict[str, object] | None = None
    signal: str | None = None
    issues: list[IssueOut] = []
    notifications: list[NotificationOut] = []
    payment_url: str | None = None
    redirect_to: str | None = None
    failure: FailureOut | None = None


class AuthResponse(BaseModel):
    """Result of a login or sign-up attempt."""

    authenticated: bool
    access_token: str | None = None
    error: str | None = None
    redirect_to: str | None = None
    notifications: list[NotificationOut] = []


class ConfirmationResponse(BaseModel):
    """Confirmation view of a completed registration."""

    event_id: int
    event_title: str
    organizer: str
    date: str
    location: str
    transaction_id: str
    amount: str
