"""Authentication router: all /api/auth/* endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from edclub.auth.dependencies import AuthContext, require_auth
from edclub.auth.provider import AuthProviderError, sign_in_with_password, sign_up
from edclub.auth.schemas import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileStats,
    RegisterRequest,
    RegisterResponse,
)
from edclub.badges.service import count_user_badges
from edclub.config import get_settings
from edclub.database import get_session
from edclub.db.models import User
from edclub.engagement.service import get_weekly_progress
from edclub.events.service import list_upcoming_events
from edclub.shared import EventDTO, UserDTO

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def user_dto(user: User) -> UserDTO:
    """Build a UserDTO from a User model."""
    return UserDTO(
        id=user.id,
        email=user.email,
        role=user.role_claim,
        created_at=user.created_at,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """Sign in with email + password and receive a session."""
    try:
        user, session = await sign_in_with_password(db, body.email, body.password)
    except AuthProviderError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    return LoginResponse(user=user_dto(user), session=session)


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> RegisterResponse:
    """Create a student account.

    `session` is null when the provider requires email confirmation first.
    """
    try:
        user, session = await sign_up(db, body.email, body.password)
    except AuthProviderError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return RegisterResponse(user=user_dto(user), session=session)


@router.get("/profile", response_model=ProfileResponse)
async def profile(auth: AuthContext = Depends(require_auth)) -> ProfileResponse:
    """Dashboard aggregate: weekly progress, badges earned, next events."""
    settings = get_settings()
    progress = await get_weekly_progress(auth.db, auth.user.id)
    badges_earned = await count_user_badges(auth.db, auth.user.id)
    upcoming = await list_upcoming_events(auth.db, limit=settings.profile_upcoming_events)

    return ProfileResponse(
        user=user_dto(auth.user),
        stats=ProfileStats(
            weekly_progress=progress,
            badges_earned=badges_earned,
            upcoming_events=[EventDTO.model_validate(e) for e in upcoming],
        ),
    )
