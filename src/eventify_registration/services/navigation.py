"""Navigation targets for the registration flow."""

from dataclasses import dataclass
from typing import Protocol

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
PROFILE_PATH = "/profile"


def payment_path(event_id: int) -> str:
    return f"/payment/{event_id}"


def confirmation_path(event_id: int, transaction_id: str) -> str:
    return f"/registration-success/{event_id}/{transaction_id}"


class Navigator(Protocol):
    """Interface for directed page transitions."""

    def navigate(self, path: str) -> None:
        """Move the user to the given path."""


@dataclass
class RecordingNavigator(Navigator):
    """Holds the latest navigation target for the presentation layer."""

    target: str | None = None

    def navigate(self, path: str) -> None:
        self.target = path

    def take(self) -> str | None:
        """Return the pending target once."""
        target, self.target = self.target, None
        return target
