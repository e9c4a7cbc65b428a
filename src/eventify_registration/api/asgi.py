"""ASGI entrypoint for the registration API."""

from eventify_registration.api.app import create_app
from eventify_registration.containers import build_container

app = create_app(build_container())
