"""Register/login routes and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookstore.core.config import Settings
from bookstore.core.database import get_db
from bookstore.core.security import TokenError, TokenService
from bookstore.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    TokenClaims,
)
from bookstore.services.users import UserExistsError, authenticate, create_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def get_app_settings(request: Request) -> Settings:
    """Dependency: the settings object the app was built with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Dependency: token service bound to the app's settings."""
    return request.app.state.token_service


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Create a user account. The password is stored only as a bcrypt hash."""
    try:
        create_user(db, body.username, body.password, body.role, settings.BCRYPT_ROUNDS)
    except UserExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = authenticate(db, body.username, body.password)
    if user is None:
        logger.info("Login failed", extra={"username": body.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = tokens.issue(TokenClaims(username=user.username, role=user.role))
    logger.info("Login succeeded", extra={"username": user.username, "role": user.role})
    return LoginResponse(message="Login successful", token=token)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the caller's claims.
    Raises 401 if the token is missing, 403 if it is invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Rejected request without bearer token", extra={"path": request.url.path})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.warning(
            "Rejected request with unusable token",
            extra={"path": request.url.path, "reason": e.message},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        ) from e
    current_user = CurrentUser(username=claims.username, role=claims.role)
    request.state.user = current_user
    return current_user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ADMIN_ROLE:
        logger.warning(
            "Rejected non-admin caller",
            extra={"username": current_user.username, "role": current_user.role},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
