"""HTTP transport for the EDClub API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from edclub.client.config import ClientSettings, get_client_settings
from edclub.client.session import SessionStore

logger = structlog.get_logger()

FALLBACK_ERROR = "Request failed."


class ApiError(Exception):
    """A non-2xx response, carrying the server's error message."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def error_message(payload: Any) -> str:  # noqa: ANN401
    """Extract a human-readable message from an error envelope."""
    if not isinstance(payload, dict):
        return FALLBACK_ERROR
    error = payload.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict):
        # Validation envelope: {formErrors: [...], fieldErrors: {field: [...]}}
        parts = list(error.get("formErrors") or [])
        for field, messages in (error.get("fieldErrors") or {}).items():
            parts.extend(f"{field}: {m}" for m in messages)
        if parts:
            return "; ".join(parts)
    return FALLBACK_ERROR


class ApiClient:
    """Thin JSON client; attaches the stored bearer token and maps errors to ApiError."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        store: SessionStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_client_settings()
        self.store = store or SessionStore(self.settings.session_path)
        self._http = httpx.AsyncClient(
            base_url=self.settings.backend_url,
            timeout=self.settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,  # noqa: ANN401
        *,
        auth: bool = True,
        params: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        headers = {"Accept": "application/json"}
        if auth:
            session = self.store.load()
            if session is not None:
                headers["Authorization"] = f"Bearer {session.access_token}"

        try:
            response = await self._http.request(
                method,
                path,
                json=body,
                params={k: v for k, v in (params or {}).items() if v is not None},
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise ApiError(str(e) or FALLBACK_ERROR) from e

        if response.status_code == 401:
            self.store.clear()

        if response.status_code == 204:
            return None

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            raise ApiError(error_message(payload), response.status_code)
        return payload
