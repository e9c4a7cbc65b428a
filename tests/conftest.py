"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from eventify_registration.config import Settings
from eventify_registration.containers import AppContainer
from eventify_registration.domain.errors import PaymentGatewayError
from eventify_registration.domain.events import EventSummary
from eventify_registration.domain.payment import CheckoutTicket, PaymentOrder
from eventify_registration.domain.session import Session
from eventify_registration.services.auth import (
    AuthService,
    IdentityClient,
    IdentityResult,
)
from eventify_registration.services.confirmation import ConfirmationStep
from eventify_registration.services.events import EventRepository, EventService
from eventify_registration.services.flows import FlowRegistry
from eventify_registration.services.payment_handoff import PaymentClient

ACCESS_TOKEN = "token-asha"
OTHER_ACCESS_TOKEN = "token-bob"


def make_event(event_id: int = 7, price: str = "500") -> EventSummary:
    return EventSummary(
        id=event_id,
        title="Code Sprint",
        description="A 24 hour hackathon",
        organizer_name="Tech Club",
        date="2025-03-14",
        location="Main Auditorium",
        participant_count=120,
        price=Decimal(price),
        image_ref="https://example.com/sprint.png",
        category="Hackathon",
    )


def make_session() -> Session:
    return Session(user_id="user-1", access_token=ACCESS_TOKEN, email="a@x.com")


def make_other_session() -> Session:
    return Session(
        user_id="user-2", access_token=OTHER_ACCESS_TOKEN, email="b@x.com"
    )


@dataclass
class InMemoryEventRepository(EventRepository):
    """In-memory event repository for tests."""

    events: dict[int, EventSummary] = field(default_factory=dict)

    def get_event(self, event_id: int) -> EventSummary | None:
        return self.events.get(event_id)


@dataclass
class FakeIdentityClient(IdentityClient):
    """Fake identity provider keyed by email and access token."""

    passwords: dict[str, str] = field(default_factory=dict)
    sessions: dict[str, Session] = field(default_factory=dict)
    signups: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    confirm_signups: bool = True

    def sign_in(self, email: str, password: str) -> IdentityResult:
        if self.passwords.get(email) != password:
            return IdentityResult(error="Invalid login credentials")
        session = Session(user_id=f"user-{email}", access_token=f"token-{email}")
        self.sessions[session.access_token] = session
        return IdentityResult(session=session)

    def sign_up(
        self, email: str, password: str, profile: dict[str, str]
    ) -> IdentityResult:
        if email in self.passwords:
            return IdentityResult(error="User already registered")
        self.passwords[email] = password
        self.signups.append((email, profile))
        if not self.confirm_signups:
            return IdentityResult()
        return self.sign_in(email, password)

    def current_session(self, access_token: str | None) -> Session | None:
        if access_token is None:
            return None
        return self.sessions.get(access_token)


@dataclass
class FakePaymentClient(PaymentClient):
    """Fake payment provider that records orders.

    When ``release`` is set, checkouts wait on it so tests can observe the
    handoff while it is still in flight.
    """

    orders: list[PaymentOrder] = field(default_factory=list)
    fail_with: str | None = None
    crash_with: Exception | None = None
    release: asyncio.Event | None = None

    async def begin_checkout(self, order: PaymentOrder) -> CheckoutTicket:
        self.orders.append(order)
        if self.release is not None:
            await self.release.wait()
        if self.fail_with is not None:
            raise PaymentGatewayError(self.fail_with)
        if self.crash_with is not None:
            raise self.crash_with
        return CheckoutTicket(
            checkout_id=f"chk_{len(self.orders)}",
            payment_url=f"https://pay.example.com/chk_{len(self.orders)}",
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="header.payload.signature",
        payment_api_url="https://pay.example.com/api",
        payment_api_key="payment-key",
        payment_webhook_token="webhook-token",
    )


@pytest.fixture
def event() -> EventSummary:
    return make_event()


@pytest.fixture
def session() -> Session:
    return make_session()


@pytest.fixture
def event_repository(event: EventSummary) -> InMemoryEventRepository:
    return InMemoryEventRepository(events={event.id: event})


@pytest.fixture
def identity_client(session: Session) -> FakeIdentityClient:
    return FakeIdentityClient(
        passwords={"a@x.com": "secret"},
        sessions={
            session.access_token: session,
            OTHER_ACCESS_TOKEN: make_other_session(),
        },
    )


@pytest.fixture
def payment_client() -> FakePaymentClient:
    return FakePaymentClient()


@pytest.fixture
def container(
    settings: Settings,
    event_repository: InMemoryEventRepository,
    identity_client: FakeIdentityClient,
    payment_client: FakePaymentClient,
) -> AppContainer:
    event_service = EventService(event_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        identity_client=identity_client,
        auth_service=AuthService(identity_client),
        event_service=event_service,
        flow_registry=FlowRegistry(
            payment_client=payment_client, currency=settings.currency_code
        ),
        confirmation_step=ConfirmationStep(
            event_service=event_service,
            currency_symbol=settings.currency_symbol,
        ),
        close_resources=close_resources,
    )
