"""Password hashing and the token service that issues and verifies JWTs."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from bookstore.core.config import DEFAULT_BCRYPT_ROUNDS, Settings
from bookstore.schemas.auth import PASSWORD_MAX_BYTES, TokenClaims


class TokenError(Exception):
    """Raised when a token cannot be accepted."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidTokenError(TokenError):
    """Raised when a token is malformed, badly signed, or lacks the identity claims."""


class TokenExpiredError(TokenError):
    """Raised when a token's exp claim has passed."""


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.
    Raises ValueError for secrets longer than bcrypt's 72-byte input.
    """
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes (UTF-8)")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long passwords never match."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issue and verify signed, time-limited access tokens.

    Tokens carry the username and role claims plus iat/exp. Verification only
    checks signature and expiry; it never consults the user store.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, identity: TokenClaims, now: datetime | None = None) -> str:
        """Create a token for identity, valid for the configured lifetime from now."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "username": identity.username,
            "role": identity.role,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token; return its username and role claims.
        Raises TokenExpiredError or InvalidTokenError.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError("Invalid token") from e

        username = payload.get("username")
        role = payload.get("role")
        if not isinstance(username, str) or not username or not isinstance(role, str):
            raise InvalidTokenError("Invalid token payload")
        return TokenClaims(username=username, role=role)
