"""Domain models for user-visible notifications."""

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A toast shown to the user."""

    title: str
    description: str
    severity: Severity = Severity.DEFAULT
