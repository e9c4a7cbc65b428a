"""Notification dispatch for user-visible toasts."""

from dataclasses import dataclass, field
from typing import Protocol

from eventify_registration.domain.notifications import Notification, Severity


class Notifier(Protocol):
    """Fire-and-forget sink for user notifications."""

    def notify(self, notification: Notification) -> None:
        """Display a notification to the user."""


@dataclass
class NotificationOutbox(Notifier):
    """Collects notifications until the presentation layer drains them."""

    pending: list[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.pending.append(notification)

    def drain(self) -> list[Notification]:
        """Return pending notifications in dispatch order and clear them."""
        drained, self.pending = self.pending, []
        return drained


def error_notification(title: str, description: str) -> Notification:
    return Notification(
        title=title, description=description, severity=Severity.DESTRUCTIVE
    )
