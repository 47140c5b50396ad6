"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Bounds for username and password input.
USERNAME_MAX_LEN = 255
# bcrypt only reads the first 72 bytes, so longer secrets are rejected rather than cut.
PASSWORD_MAX_BYTES = 72

Role = Literal["user", "admin"]


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes (UTF-8)")
    return v


class RegisterRequest(BaseModel):
    """New account; an absent, null or empty role becomes 'user'."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, description="Password (at most 72 UTF-8 bytes)")
    role: Role | None = Field(default=None, description="'user' or 'admin'; defaults to 'user'")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)

    @field_validator("role", mode="before")
    @classmethod
    def blank_role_is_absent(cls, v: object) -> object:
        if v == "":
            return None
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")


class TokenClaims(BaseModel):
    """Identity claims carried inside an access token."""

    username: str
    role: str


class CurrentUser(TokenClaims):
    """Authenticated caller resolved by the auth gate."""

    model_config = ConfigDict(from_attributes=True)
