"""Login and sign-up against the identity provider."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from eventify_registration.domain.notifications import Notification
from eventify_registration.domain.session import Session
from eventify_registration.services.navigation import PROFILE_PATH
from eventify_registration.services.notifications import (
    NotificationOutbox,
    error_notification,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityResult:
    """Session or error message returned by the identity provider."""

    session: Session | None = None
    error: str | None = None


class IdentityClient(Protocol):
    """Interface for the external identity provider."""

    def sign_in(self, email: str, password: str) -> IdentityResult:
        """Sign in with email and password."""

    def sign_up(
        self, email: str, password: str, profile: dict[str, str]
    ) -> IdentityResult:
        """Create an account and return its session."""

    def current_session(self, access_token: str | None) -> Session | None:
        """Return the session for an access token, if it is still valid."""


@dataclass(frozen=True)
class AuthOutcome:
    """Result of a login or sign-up attempt."""

    session: Session | None
    error: str | None
    redirect_to: str | None
    notifications: list[Notification] = field(default_factory=list)


@dataclass
class AuthService:
    """Runs login and sign-up forms against the identity client."""

    identity_client: IdentityClient

    def sign_in(self, email: str, password: str) -> AuthOutcome:
        """Sign in; on failure the form stays editable with the error shown."""
        outbox = NotificationOutbox()
        if not email or not password:
            return _form_error(outbox, "Please fill in all fields")
        result = self.identity_client.sign_in(email, password)
        return _finish(outbox, result)

    def sign_up(
        self, name: str, email: str, password: str, confirm_password: str
    ) -> AuthOutcome:
        """Create an account with the username profile field."""
        outbox = NotificationOutbox()
        if not name or not email or not password or not confirm_password:
            return _form_error(outbox, "Please fill in all fields")
        if password != confirm_password:
            return _form_error(outbox, "Passwords do not match")
        result = self.identity_client.sign_up(email, password, {"username": name})
        return _finish(outbox, result)


def _form_error(outbox: NotificationOutbox, message: str) -> AuthOutcome:
    outbox.notify(error_notification("Error", message))
    return AuthOutcome(
        session=None, error=None, redirect_to=None, notifications=outbox.drain()
    )


def _finish(outbox: NotificationOutbox, result: IdentityResult) -> AuthOutcome:
    if result.session is None and result.error is None:
        outbox.notify(
            Notification(
                title="Account created",
                description="Please check your email to confirm your account",
            )
        )
        return AuthOutcome(
            session=None, error=None, redirect_to=None, notifications=outbox.drain()
        )
    if result.session is None:
        message = result.error or "Authentication failed"
        logger.info("Authentication rejected", extra={"reason": message})
        outbox.notify(error_notification("Error", message))
        return AuthOutcome(
            session=None,
            error=message,
            redirect_to=None,
            notifications=outbox.drain(),
        )
    return AuthOutcome(
        session=result.session,
        error=None,
        redirect_to=PROFILE_PATH,
        notifications=outbox.drain(),
    )
