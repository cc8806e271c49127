"""
HS256 JWT token management for the auth provider.

Access tokens carry the user's `role` claim so clients can render teacher-only
controls without an extra round trip; the API layer still re-reads the role
from the user row on every request.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from edclub.config import get_settings


def _encode(payload: dict[str, Any]) -> str:
    settings = get_settings()
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, email: str, role: str, *, now: datetime | None = None) -> tuple[str, int]:
    """
    Create a short-lived access token.

    Args:
        user_id: The user's id (UUID string).
        email: The user's email address.
        role: The user's role claim ("student" or "teacher").
        now: Issue time, defaults to the current UTC time.

    Returns:
        (encoded JWT, expiry as epoch seconds).
    """
    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    expires = now + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": expires,
        "iss": settings.jwt_issuer,
        "type": "access",
    }
    return _encode(payload), int(expires.timestamp())


def create_refresh_token(user_id: str, *, now: datetime | None = None) -> str:
    """Create a long-lived refresh token with a unique JTI."""
    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": user_id,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_refresh_token_expire_days),
        "iss": settings.jwt_issuer,
        "type": "refresh",
    }
    return _encode(payload)


def verify_token(token: str, expected_type: str = "access") -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or wrong type.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise jwt.InvalidTokenError(msg) from None

    if payload.get("type") != expected_type:
        msg = f"Expected token type '{expected_type}', got '{payload.get('type')}'"
        raise jwt.InvalidTokenError(msg)

    return payload
