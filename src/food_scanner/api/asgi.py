"""ASGI entrypoint for the food scanner API."""

from food_scanner.api.app import create_app
from food_scanner.containers import build_container

app = create_app(build_container())
