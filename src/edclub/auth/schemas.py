"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from edclub.config import get_settings
from edclub.shared import DTO, EventDTO, SessionDTO, UserDTO, WeeklyProgressDTO


class CredentialsRequest(DTO):
    """Email + password, shared by login and register."""

    email: EmailStr
    password: str = Field(..., max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def check_length(cls, v: str) -> str:
        """Enforce the configured minimum password length."""
        minimum = get_settings().password_min_length
        if len(v) < minimum:
            msg = f"Password must be at least {minimum} characters"
            raise ValueError(msg)
        return v


class LoginRequest(CredentialsRequest):
    pass


class RegisterRequest(CredentialsRequest):
    pass


class LoginResponse(DTO):
    user: UserDTO
    session: SessionDTO


class RegisterResponse(DTO):
    """`session` is None while the provider waits for email confirmation."""

    user: UserDTO
    session: SessionDTO | None = None


class ProfileStats(DTO):
    weekly_progress: WeeklyProgressDTO
    badges_earned: int = 0
    upcoming_events: list[EventDTO] = []


class ProfileResponse(DTO):
    user: UserDTO
    stats: ProfileStats
