"""Domain models for registrant data."""

from dataclasses import dataclass
from enum import Enum

from eventify_registration.domain.errors import ErrorCode

TEAM_SIZE_OPTIONS: dict[int, str] = {
    1: "Individual (1 Person)",
    2: "Team of 2",
    3: "Team of 3",
    4: "Team of 4",
}


class DraftField(Enum):
    """Editable draft fields, keyed by their form names."""

    NAME = "name"
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"
    TEAM_SIZE = "teamSize"


REQUIRED_TEXT_FIELDS = (DraftField.NAME, DraftField.EMAIL, DraftField.PHONE_NUMBER)


@dataclass
class RegistrationDraft:
    """In-progress registrant data; mutated one field at a time."""

    name: str = ""
    email: str = ""
    phone_number: str = ""
    team_size: int = 1

    def value_of(self, field: DraftField) -> str | int:
        return getattr(self, _ATTRIBUTES[field])

    def set_value(self, field: DraftField, value: str | int) -> None:
        setattr(self, _ATTRIBUTES[field], value)

    def as_dict(self) -> dict[str, object]:
        return {field.value: self.value_of(field) for field in DraftField}


_ATTRIBUTES = {
    DraftField.NAME: "name",
    DraftField.EMAIL: "email",
    DraftField.PHONE_NUMBER: "phone_number",
    DraftField.TEAM_SIZE: "team_size",
}


@dataclass(frozen=True)
class RegistrationRequest:
    """Validated registration ready to be handed to payment."""

    event_id: int
    name: str
    email: str
    phone_number: str
    team_size: int


@dataclass(frozen=True)
class ValidationIssue:
    """Single reason a draft was rejected."""

    code: ErrorCode
    message: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a draft: a request or the reasons it failed."""

    request: RegistrationRequest | None = None
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return self.request is not None

    @property
    def first_issue(self) -> ValidationIssue | None:
        return self.issues[0] if self.issues else None
