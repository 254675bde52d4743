"""ASGI entrypoint for the nosugar API."""

from nosugar.api.app import create_app
from nosugar.containers import build_container

app = create_app(build_container())
