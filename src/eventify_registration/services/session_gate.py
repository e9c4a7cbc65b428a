"""Authentication gate in front of the registration form."""

import logging
from dataclasses import dataclass
from typing import Protocol

from eventify_registration.domain.session import GateStatus, Session
from eventify_registration.services.navigation import (
    LOGIN_PATH,
    SIGNUP_PATH,
    Navigator,
)

logger = logging.getLogger(__name__)


class ClosableFlow(Protocol):
    """A registration surface that can be closed before navigating away."""

    def close(self) -> None:
        """Close the surface and discard its draft."""


@dataclass
class SessionGate:
    """Decides whether the caller may enter the registration step."""

    navigator: Navigator

    def evaluate(self, session: Session | None) -> GateStatus:
        """Return the gate status for the session as it is right now."""
        if session is None:
            return GateStatus.UNAUTHENTICATED
        return GateStatus.AUTHENTICATED

    def redirect_to_login(self, flow: ClosableFlow) -> str:
        """Close the flow and send the user to the login page."""
        return self._leave(flow, LOGIN_PATH)

    def redirect_to_sign_up(self, flow: ClosableFlow) -> str:
        """Close the flow and send the user to the sign-up page."""
        return self._leave(flow, SIGNUP_PATH)

    def _leave(self, flow: ClosableFlow, path: str) -> str:
        flow.close()
        logger.info("Registration closed for authentication", extra={"path": path})
        self.navigator.navigate(path)
        return path
