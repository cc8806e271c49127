"""Middleware registration."""

from fastapi import FastAPI

from edclub.config import Settings
from edclub.middleware.cors import setup_cors
from edclub.middleware.error_handler import setup_error_handlers
from edclub.middleware.logging import setup_logging
from edclub.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware in the correct order.

    FastAPI/Starlette executes middleware in reverse-add order (last added = outermost).
    CORS must be outermost so preflights never reach the request logger or the routes.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
