"""Durable client session: token and decoded identity kept in a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any

import jwt
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".bookstore" / "session.json"


class SessionUser(BaseModel):
    """Identity read from the token for display purposes only."""

    username: str
    role: str


class SessionState(BaseModel):
    token: str | None = None
    user: SessionUser | None = None


def decode_token_claims(token: str) -> SessionUser | None:
    """
    Read username and role from a token without checking its signature.

    Only used to decide what to show; the server re-checks every request.
    Returns None when the token cannot be decoded.
    """
    try:
        payload: dict[str, Any] = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    username = payload.get("username")
    role = payload.get("role")
    if not isinstance(username, str) or not isinstance(role, str):
        return None
    return SessionUser(username=username, role=role)


class SessionStore:
    """Load, save and clear the session file."""

    def __init__(self, path: Path | str = DEFAULT_SESSION_FILE) -> None:
        self.path = Path(path)

    def load(self) -> SessionState:
        """Return the stored session, or an empty one if the file is missing or unreadable."""
        if not self.path.exists():
            return SessionState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return SessionState.model_validate(data)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return SessionState()

    def save(self, state: SessionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(state.model_dump_json(indent=2), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
