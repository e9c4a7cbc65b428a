"""Login and sign-up endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from eventify_registration.api.models import (
    AuthResponse,
    LoginRequest,
    NotificationOut,
    SignUpRequest,
)

if TYPE_CHECKING:
    from eventify_registration.containers import AppContainer
    from eventify_registration.services.auth import AuthOutcome

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> AuthResponse:
    """Sign in with email and password."""
    container: AppContainer = request.app.state.container
    outcome = container.auth_service.sign_in(payload.email, payload.password)
    return _auth_response(outcome)


@router.post("/signup")
async def sign_up(payload: SignUpRequest, request: Request) -> AuthResponse:
    """Create an account."""
    container: AppContainer = request.app.state.container
    outcome = container.auth_service.sign_up(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        confirm_password=payload.confirm_password,
    )
    return _auth_response(outcome)


def _auth_response(outcome: AuthOutcome) -> AuthResponse:
    return AuthResponse(
        authenticated=outcome.session is not None,
        access_token=outcome.session.access_token if outcome.session else None,
        error=outcome.error,
        redirect_to=outcome.redirect_to,
        notifications=[
            NotificationOut(
                title=item.title,
                description=item.description,
                severity=item.severity.value,
            )
            for item in outcome.notifications
        ],
    )
