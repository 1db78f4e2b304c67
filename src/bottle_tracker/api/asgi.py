"""ASGI entrypoint for the bottle tracker API."""

from bottle_tracker.api.app import create_app
from bottle_tracker.containers import build_container

app = create_app(build_container())
