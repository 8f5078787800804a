"""ASGI entrypoint for the batch nutrition API."""

from batch_nutrition.api.app import create_app
from batch_nutrition.containers import build_container

app = create_app(build_container())
