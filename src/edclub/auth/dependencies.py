"""FastAPI authentication dependencies."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from edclub.auth.provider import get_user
from edclub.database import get_session
from edclub.db.models import User
from edclub.shared import Role


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller plus the backend handle the handler should use."""

    user: User
    db: AsyncSession
    access_token: str


def extract_bearer_token(header: str | None) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header value."""
    if not header:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise HTTPException(status_code=401, detail="Authorization header must be a Bearer token")
    return token


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_session),
) -> AuthContext:
    """
    Authenticate the caller from the bearer token.

    Raises 401 when the header is missing, malformed, or the token is rejected.
    """
    access_token = extract_bearer_token(request.headers.get("authorization"))
    user = await get_user(db, access_token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired access token")
    return AuthContext(user=user, db=db, access_token=access_token)


def require_teacher_role(user: User) -> None:
    """Raise 403 unless the user's role claim is `teacher`."""
    if user.role_claim is not Role.TEACHER:
        raise HTTPException(status_code=403, detail="Only teachers can perform this action")


async def require_teacher(auth: AuthContext = Depends(require_auth)) -> AuthContext:
    """Same as require_auth but additionally requires the teacher role."""
    require_teacher_role(auth.user)
    return auth
