"""Account operations: login, register, profile, logout."""

from __future__ import annotations

from edclub.client.http import ApiClient
from edclub.client.session import SessionTokens
from edclub.shared import DTO, EventDTO, SessionDTO, UserDTO, WeeklyProgressDTO


class ProfileStats(DTO):
    weekly_progress: WeeklyProgressDTO = WeeklyProgressDTO()
    badges_earned: int = 0
    upcoming_events: list[EventDTO] = []


class Profile(DTO):
    user: UserDTO
    stats: ProfileStats


def _remember(api: ApiClient, user: UserDTO, session: SessionDTO) -> None:
    api.store.save(
        SessionTokens(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user_id=user.id,
            email=user.email,
        )
    )


async def login(api: ApiClient, email: str, password: str) -> tuple[UserDTO, SessionDTO]:
    """Sign in and persist the session."""
    payload = await api.request("POST", "/api/auth/login", {"email": email, "password": password}, auth=False)
    user = UserDTO.model_validate(payload["user"])
    session = SessionDTO.model_validate(payload["session"])
    _remember(api, user, session)
    return user, session


async def register(api: ApiClient, email: str, password: str) -> tuple[UserDTO, SessionDTO | None]:
    """Create an account. The session is None while email confirmation is pending."""
    payload = await api.request("POST", "/api/auth/register", {"email": email, "password": password}, auth=False)
    user = UserDTO.model_validate(payload["user"])
    session = SessionDTO.model_validate(payload["session"]) if payload.get("session") else None
    if session is not None:
        _remember(api, user, session)
    return user, session


async def profile(api: ApiClient) -> Profile:
    payload = await api.request("GET", "/api/auth/profile")
    return Profile.model_validate(payload)


def logout(api: ApiClient) -> None:
    api.store.clear()
