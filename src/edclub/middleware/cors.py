"""CORS middleware driven by the configured origin allow-list.

Allow-listed origins are echoed back with credentials enabled. Anything else
(no Origin, a wildcard allow-list, an unknown origin) gets a non-credentialed
`*` so public reads keep working from any page.
"""

from typing import Any

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from edclub.config import Settings

ALLOW_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
ALLOW_HEADERS = "Authorization, Content-Type, apikey, X-Client-Info, Prefer, X-Request-Id"
EXPOSE_HEADERS = "X-Request-Id"
MAX_AGE_SECONDS = "86400"


def resolve_cors_origin(request_origin: str | None, allowed_origins: list[str]) -> tuple[str, bool]:
    """Return (Access-Control-Allow-Origin value, whether credentials are allowed)."""
    if not request_origin or not allowed_origins or "*" in allowed_origins:
        return "*", False
    if request_origin in allowed_origins:
        return request_origin, True
    return "*", False


class CorsMiddleware(BaseHTTPMiddleware):
    """Apply allow-list CORS headers; answer preflights directly with 204."""

    def __init__(self, app: Any, allowed_origins: list[str]) -> None:  # noqa: ANN401
        super().__init__(app)
        self.allowed_origins = [origin.strip() for origin in allowed_origins if origin.strip()]

    def _apply(self, request: Request, response: Response) -> Response:
        origin, allow_credentials = resolve_cors_origin(request.headers.get("origin"), self.allowed_origins)
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        response.headers["Access-Control-Expose-Headers"] = EXPOSE_HEADERS
        response.headers["Access-Control-Max-Age"] = MAX_AGE_SECONDS
        if allow_credentials:
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
        elif "Access-Control-Allow-Credentials" in response.headers:
            del response.headers["Access-Control-Allow-Credentials"]
        return response

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return self._apply(request, Response(status_code=204))
        response = await call_next(request)
        return self._apply(request, response)


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS from `cors_allowed_origins`."""
    app.add_middleware(CorsMiddleware, allowed_origins=settings.cors_allowed_origins)
