from eventify_registration.domain.notifications import Severity
from eventify_registration.services.auth import AuthService
from tests.conftest import FakeIdentityClient


def test_sign_in_success_redirects_to_profile() -> None:
    client = FakeIdentityClient(passwords={"a@x.com": "secret"})
    service = AuthService(client)

    outcome = service.sign_in("a@x.com", "secret")

    assert outcome.session is not None
    assert outcome.session.access_token == "token-a@x.com"
    assert outcome.error is None
    assert outcome.redirect_to == "/profile"
    assert outcome.notifications == []


def test_sign_in_failure_keeps_form_with_provider_message() -> None:
    client = FakeIdentityClient(passwords={"a@x.com": "secret"})
    service = AuthService(client)

    outcome = service.sign_in("a@x.com", "wrong")

    assert outcome.session is None
    assert outcome.redirect_to is None
    assert outcome.error == "Invalid login credentials"
    notification = outcome.notifications[0]
    assert notification.title == "Error"
    assert notification.description == "Invalid login credentials"
    assert notification.severity is Severity.DESTRUCTIVE


def test_sign_in_requires_both_fields() -> None:
    client = FakeIdentityClient()
    service = AuthService(client)

    outcome = service.sign_in("", "secret")

    assert outcome.session is None
    assert outcome.notifications[0].description == "Please fill in all fields"
    assert client.sessions == {}


def test_sign_up_stores_username_and_signs_in() -> None:
    client = FakeIdentityClient()
    service = AuthService(client)

    outcome = service.sign_up("Asha", "asha@example.com", "pw", "pw")

    assert client.signups == [("asha@example.com", {"username": "Asha"})]
    assert outcome.session is not None
    assert outcome.redirect_to == "/profile"


def test_sign_up_rejects_mismatched_passwords() -> None:
    client = FakeIdentityClient()
    service = AuthService(client)

    outcome = service.sign_up("Asha", "asha@example.com", "pw", "other")

    assert outcome.session is None
    assert outcome.notifications[0].description == "Passwords do not match"
    assert client.signups == []


def test_sign_up_requires_every_field() -> None:
    client = FakeIdentityClient()
    service = AuthService(client)

    outcome = service.sign_up("", "asha@example.com", "pw", "pw")

    assert outcome.notifications[0].description == "Please fill in all fields"
    assert client.signups == []


def test_sign_up_pending_confirmation_has_no_session() -> None:
    client = FakeIdentityClient(confirm_signups=False)
    service = AuthService(client)

    outcome = service.sign_up("Asha", "asha@example.com", "pw", "pw")

    assert outcome.session is None
    assert outcome.error is None
    assert outcome.redirect_to is None
    assert outcome.notifications[0].title == "Account created"
    assert outcome.notifications[0].severity is Severity.DEFAULT


def test_sign_up_existing_account_returns_error() -> None:
    client = FakeIdentityClient(passwords={"a@x.com": "secret"})
    service = AuthService(client)

    outcome = service.sign_up("Asha", "a@x.com", "pw", "pw")

    assert outcome.error == "User already registered"
    assert outcome.redirect_to is None
