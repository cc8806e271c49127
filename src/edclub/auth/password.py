"""
Password hashing for the auth provider (argon2id).

Cost parameters come from settings; hashes made with older parameters are
upgraded on the next successful sign-in.
"""

from __future__ import annotations

from functools import lru_cache

import argon2
from argon2.exceptions import InvalidHashError, VerificationError

from edclub.config import get_settings


@lru_cache
def get_hasher() -> argon2.PasswordHasher:
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.password_hash_time_cost,
        memory_cost=settings.password_hash_memory_kib,
        parallelism=1,
        type=argon2.Type.ID,
    )


def hash_password(password: str) -> str:
    return get_hasher().hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """True on match. A wrong password and an unreadable hash are both just False."""
    try:
        return get_hasher().verify(stored_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(stored_hash: str) -> bool:
    """Whether `stored_hash` was made with different cost parameters than the configured ones."""
    try:
        return get_hasher().check_needs_rehash(stored_hash)
    except InvalidHashError:
        return True
