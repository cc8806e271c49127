"""Local session persistence.

The session is a small JSON document on disk, readable only by its owner.
Anything that cannot be parsed back into `SessionTokens` is treated as
"no session" so a corrupt file never blocks a fresh login.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog
from pydantic import ValidationError

from edclub.shared import DTO

logger = structlog.get_logger()

SESSION_FILE_MODE = 0o600


class SessionTokens(DTO):
    access_token: str
    refresh_token: str
    expires_at: int
    user_id: str | None = None
    email: str | None = None


class SessionStore:
    """Load, save and clear the persisted session at `path`."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> SessionTokens | None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("session_unreadable", path=str(self.path), exc_info=True)
            return None

        try:
            return SessionTokens.model_validate(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError):
            logger.warning("session_malformed", path=str(self.path))
            return None

    def save(self, tokens: SessionTokens) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = tokens.model_dump_json(by_alias=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SESSION_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        # O_CREAT only applies the mode to new files
        os.chmod(self.path, SESSION_FILE_MODE)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
