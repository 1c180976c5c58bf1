"""ASGI entrypoint for the work clock API."""

from work_clock.api.app import create_app
from work_clock.containers import build_container

app = create_app(build_container())
