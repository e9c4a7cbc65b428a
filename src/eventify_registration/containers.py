"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from eventify_registration.adapters.payment_client import HttpxPaymentClient
from eventify_registration.adapters.supabase_event_repository import (
    SupabaseEventRepository,
)
from eventify_registration.adapters.supabase_identity_client import (
    SupabaseIdentityClient,
)
from eventify_registration.config import Settings
from eventify_registration.services.auth import AuthService, IdentityClient
from eventify_registration.services.confirmation import ConfirmationStep
from eventify_registration.services.events import EventService
from eventify_registration.services.flows import FlowRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_client: IdentityClient
    auth_service: AuthService
    event_service: EventService
    flow_registry: FlowRegistry
    confirmation_step: ConfirmationStep
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    identity_client = SupabaseIdentityClient(supabase_client)
    event_service = EventService(SupabaseEventRepository(supabase_client))
    payment_client = HttpxPaymentClient.create(
        base_url=resolved_settings.payment_api_url,
        api_key=resolved_settings.payment_api_key,
    )

    async def close_resources() -> None:
        await payment_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_client=identity_client,
        auth_service=AuthService(identity_client),
        event_service=event_service,
        flow_registry=FlowRegistry(
            payment_client=payment_client,
            currency=resolved_settings.currency_code,
            ttl_seconds=resolved_settings.flow_ttl_seconds,
        ),
        confirmation_step=ConfirmationStep(
            event_service=event_service,
            currency_symbol=resolved_settings.currency_symbol,
        ),
        close_resources=close_resources,
    )
