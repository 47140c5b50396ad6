"""Pydantic request/response schemas."""

from bookstore.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    TokenClaims,
)
from bookstore.schemas.books import BookCreate, BookMutationResponse, BookOut, BookUpdate
from bookstore.schemas.health import HealthResponse

__all__ = [
    "BookCreate",
    "BookMutationResponse",
    "BookOut",
    "BookUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "TokenClaims",
]
