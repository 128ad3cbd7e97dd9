"""ASGI entrypoint for the projhealth API."""

from projhealth.api.app import create_app
from projhealth.containers import build_container

app = create_app(build_container())
