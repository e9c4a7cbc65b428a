"""Identity session as seen by the registration flow."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Session:
    """Opaque session issued by the identity provider."""

    user_id: str
    access_token: str
    email: str | None = None


class GateStatus(Enum):
    """Result of evaluating the session gate."""

    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
