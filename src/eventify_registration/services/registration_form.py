"""Registration form state and validation."""

import logging
import re
from dataclasses import dataclass, field

from eventify_registration.domain.errors import ErrorCode, InvalidFieldValueError
from eventify_registration.domain.events import EventSummary
from eventify_registration.domain.notifications import Notification
from eventify_registration.domain.registration import (
    REQUIRED_TEXT_FIELDS,
    TEAM_SIZE_OPTIONS,
    DraftField,
    RegistrationDraft,
    RegistrationRequest,
    ValidationIssue,
    ValidationResult,
)
from eventify_registration.domain.session import Session
from eventify_registration.services.notifications import (
    Notifier,
    error_notification,
)

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_ISSUE_NOTIFICATIONS = {
    ErrorCode.AUTH_REQUIRED: error_notification(
        "Authentication Required",
        "Please login or sign up to register for events",
    ),
    ErrorCode.MISSING_FIELDS: error_notification(
        "Missing Information", "Please fill in all required fields"
    ),
    ErrorCode.INVALID_EMAIL: error_notification(
        "Invalid Email", "Please enter a valid email address"
    ),
    ErrorCode.INVALID_TEAM_SIZE: error_notification(
        "Invalid Team Size", "Please choose a team of 1 to 4 people"
    ),
}

SUBMITTED_NOTIFICATION = Notification(
    title="Registration Submitted",
    description="Redirecting to payment...",
)


@dataclass
class RegistrationFormController:
    """Owns the registrant draft for one open registration.

    Edits never validate. ``validate`` checks the draft against the current
    session and either returns an immutable request or the reasons it was
    rejected, notifying the user in both cases. It never starts a payment.
    """

    event: EventSummary
    notifier: Notifier
    draft: RegistrationDraft = field(default_factory=RegistrationDraft)

    def update(self, field_name: DraftField, value: str | int) -> RegistrationDraft:
        """Set a single draft field and return the draft."""
        if field_name is DraftField.TEAM_SIZE:
            self.draft.set_value(field_name, _coerce_team_size(value))
        else:
            self.draft.set_value(field_name, str(value))
        return self.draft

    def validate(self, session: Session | None) -> ValidationResult:
        """Validate the draft and build a registration request."""
        if session is None:
            issue = ValidationIssue(
                code=ErrorCode.AUTH_REQUIRED,
                message="Authentication required",
            )
            return self._reject((issue,))

        issues: list[ValidationIssue] = []
        missing = tuple(
            entry.value
            for entry in REQUIRED_TEXT_FIELDS
            if not str(self.draft.value_of(entry)).strip()
        )
        if missing:
            issues.append(
                ValidationIssue(
                    code=ErrorCode.MISSING_FIELDS,
                    message=f"Missing required fields: {', '.join(missing)}",
                    fields=missing,
                )
            )
        email = self.draft.email.strip()
        if email and not _EMAIL_PATTERN.match(email):
            issues.append(
                ValidationIssue(
                    code=ErrorCode.INVALID_EMAIL,
                    message="Email address is not valid",
                    fields=(DraftField.EMAIL.value,),
                )
            )
        if self.draft.team_size not in TEAM_SIZE_OPTIONS:
            issues.append(
                ValidationIssue(
                    code=ErrorCode.INVALID_TEAM_SIZE,
                    message="Team size must be between 1 and 4",
                    fields=(DraftField.TEAM_SIZE.value,),
                )
            )
        if issues:
            return self._reject(tuple(issues))

        request = RegistrationRequest(
            event_id=self.event.id,
            name=self.draft.name.strip(),
            email=email,
            phone_number=self.draft.phone_number.strip(),
            team_size=self.draft.team_size,
        )
        self.notifier.notify(SUBMITTED_NOTIFICATION)
        return ValidationResult(request=request)

    def _reject(self, issues: tuple[ValidationIssue, ...]) -> ValidationResult:
        first = issues[0]
        logger.info(
            "Registration draft rejected",
            extra={"event_id": self.event.id, "code": first.code.value},
        )
        self.notifier.notify(_ISSUE_NOTIFICATIONS[first.code])
        return ValidationResult(issues=issues)


def _coerce_team_size(value: str | int) -> int:
    if isinstance(value, bool):
        raise InvalidFieldValueError(DraftField.TEAM_SIZE.value)
    if isinstance(value, int):
        return value
    cleaned = str(value).strip()
    if not cleaned.lstrip("-").isdigit():
        raise InvalidFieldValueError(DraftField.TEAM_SIZE.value)
    return int(cleaned)
