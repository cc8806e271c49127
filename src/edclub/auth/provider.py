"""
Password auth provider.

Owns the `users` table, password hashes and token issue. Route handlers only
call the functions below and never inspect hashes or token internals.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import jwt
import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from edclub.auth.jwt import create_access_token, create_refresh_token, verify_token
from edclub.auth.password import hash_password, needs_rehash, verify_password
from edclub.config import get_settings
from edclub.db.models import User
from edclub.shared import Role, SessionDTO

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


class AuthProviderError(Exception):
    """The provider rejected a sign-in or sign-up. The message is client-safe."""


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email (case-insensitive)."""
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower().strip()))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, access_token: str) -> User | None:
    """Resolve an access token to its user. None when the token is rejected."""
    try:
        payload = verify_token(access_token, expected_type="access")
    except jwt.InvalidTokenError as e:
        logger.info("access_token_rejected", reason=str(e))
        return None
    return await get_user_by_id(db, str(payload.get("sub", "")))


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def issue_session(user: User) -> SessionDTO:
    """Create a fresh access/refresh token pair for a user."""
    role = user.role_claim or Role.STUDENT
    access_token, expires_at = create_access_token(user.id, user.email, role.value)
    return SessionDTO(
        access_token=access_token,
        refresh_token=create_refresh_token(user.id),
        expires_at=expires_at,
    )


async def sign_up(db: AsyncSession, email: str, password: str) -> tuple[User, SessionDTO | None]:
    """
    Register a new student account.

    Returns the user and, unless email confirmation is required, a session.

    Raises:
        AuthProviderError: If the email is already registered.
    """
    settings = get_settings()
    if await get_user_by_email(db, email) is not None:
        msg = "User already registered"
        raise AuthProviderError(msg)

    now = datetime.now(timezone.utc)
    user = User(
        email=email.lower().strip(),
        password_hash=hash_password(password),
        role=Role.STUDENT.value,
        created_at=now,
        email_confirmed_at=None if settings.auth_require_email_confirmation else now,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent sign-up claimed the email after the lookup
        await db.rollback()
        msg = "User already registered"
        raise AuthProviderError(msg) from None
    logger.info("user_registered", user_id=user.id, confirmation_required=settings.auth_require_email_confirmation)

    if user.email_confirmed_at is None:
        await db.commit()
        return user, None

    user.last_sign_in_at = now
    await db.commit()
    return user, issue_session(user)


async def sign_in_with_password(db: AsyncSession, email: str, password: str) -> tuple[User, SessionDTO]:
    """
    Authenticate with email + password.

    Raises:
        AuthProviderError: If the credentials are invalid or the email is unconfirmed.
    """
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("sign_in_rejected", email=email)
        msg = "Invalid login credentials"
        raise AuthProviderError(msg)

    if user.email_confirmed_at is None:
        msg = "Email not confirmed"
        raise AuthProviderError(msg)

    user.last_sign_in_at = datetime.now(timezone.utc)
    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        logger.info("password_rehashed", user_id=user.id)
    await db.commit()

    return user, issue_session(user)


# ---------------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------------


async def set_user_role(db: AsyncSession, email: str, role: Role) -> User:
    """Change a user's role claim. Raises LookupError for unknown emails."""
    user = await get_user_by_email(db, email)
    if user is None:
        msg = f"No user with email {email}"
        raise LookupError(msg)
    user.role = role.value
    await db.commit()
    logger.info("user_role_changed", user_id=user.id, role=role.value)
    return user


async def confirm_email(db: AsyncSession, email: str) -> User:
    """Mark a user's email as confirmed. Raises LookupError for unknown emails."""
    user = await get_user_by_email(db, email)
    if user is None:
        msg = f"No user with email {email}"
        raise LookupError(msg)
    if user.email_confirmed_at is None:
        user.email_confirmed_at = datetime.now(timezone.utc)
        await db.commit()
    return user
