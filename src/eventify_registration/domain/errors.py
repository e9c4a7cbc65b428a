"""Domain error codes for the registration flow."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_TEAM_SIZE = "INVALID_TEAM_SIZE"
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"
    CONTROLS_LOCKED = "CONTROLS_LOCKED"
    DISMISSAL_REFUSED = "DISMISSAL_REFUSED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PAYMENT_GATEWAY = "PAYMENT_GATEWAY"
    FLOW_NOT_FOUND = "FLOW_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_TRANSACTION_ID = "INVALID_TRANSACTION_ID"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthRequiredError(DomainError):
    """Raised when a flow step needs a session and none is present."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTH_REQUIRED,
            message="Please login or sign up to register for events",
        )


class InvalidFieldValueError(DomainError):
    """Raised when a draft field receives a value of the wrong kind."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FIELD_VALUE,
            message=f"Invalid value for {field}",
        )
        self.field = field


class ControlsLockedError(DomainError):
    """Raised when the form is edited while a submission is in flight."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CONTROLS_LOCKED,
            message="Registration is being processed",
        )


class DismissalRefusedError(DomainError):
    """Raised when a flow is dismissed while a payment is in flight."""

    def __init__(self, state: str) -> None:
        super().__init__(
            code=ErrorCode.DISMISSAL_REFUSED,
            message="Registration cannot be closed while payment is in progress",
        )
        self.state = state


class InvalidTransitionError(DomainError):
    """Raised when a payment outcome arrives in the wrong state."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot {action} while {state}",
        )
        self.action = action
        self.state = state


class PaymentGatewayError(DomainError):
    """Raised when the payment provider cannot accept a handoff."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.PAYMENT_GATEWAY, message=reason)


class FlowNotFoundError(DomainError):
    """Raised when a registration flow is not open."""

    def __init__(self, flow_id: str) -> None:
        super().__init__(
            code=ErrorCode.FLOW_NOT_FOUND,
            message="Registration not found",
        )
        self.flow_id = flow_id


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidTransactionIdError(DomainError):
    """Raised when a confirmation is requested without a transaction id."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSACTION_ID,
            message="Invalid transaction ID",
        )
