"""Supabase Auth identity client."""

import logging
from dataclasses import dataclass

from supabase import AuthError, Client

from eventify_registration.domain.session import Session
from eventify_registration.services.auth import IdentityClient, IdentityResult

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityClient(IdentityClient):
    """Supabase implementation of the identity provider."""

    client: Client

    def sign_in(self, email: str, password: str) -> IdentityResult:
        """Sign in with Supabase email/password auth."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            return IdentityResult(error=exc.message)
        return IdentityResult(session=_to_session(response))

    def sign_up(
        self, email: str, password: str, profile: dict[str, str]
    ) -> IdentityResult:
        """Create a Supabase user with profile metadata."""
        try:
            response = self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": profile}}
            )
        except AuthError as exc:
            return IdentityResult(error=exc.message)
        return IdentityResult(session=_to_session(response))

    def current_session(self, access_token: str | None) -> Session | None:
        """Return the session for a JWT if Supabase still accepts it."""
        if not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError:
            logger.info("Rejected access token")
            return None
        if response is None or response.user is None:
            return None
        return Session(
            user_id=str(response.user.id),
            access_token=access_token,
            email=response.user.email,
        )


def _to_session(response) -> Session | None:  # type: ignore[no-untyped-def]
    if response.session is None or response.user is None:
        return None
    return Session(
        user_id=str(response.user.id),
        access_token=response.session.access_token,
        email=response.user.email,
    )
