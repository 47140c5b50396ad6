"""Credential store: user lookup, registration, and password checks."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.core.config import DEFAULT_BCRYPT_ROUNDS
from bookstore.core.security import hash_password, verify_password
from bookstore.models import User

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class UserExistsError(Exception):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        self.message = "User already exists"
        super().__init__(self.message)


def get_user_by_username(session: Session, username: str) -> User | None:
    return session.query(User).filter(User.username == username).first()


def create_user(
    session: Session,
    username: str,
    password: str,
    role: str | None = None,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Create a user with a hashed password; role defaults to 'user'.

    Raises UserExistsError if the username is taken, including when a
    concurrent registration wins the insert.
    """
    if get_user_by_username(session, username) is not None:
        raise UserExistsError(username)

    user = User(
        username=username,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        role=role or DEFAULT_ROLE,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise UserExistsError(username) from e
    session.refresh(user)
    logger.info("User registered", extra={"username": user.username, "role": user.role})
    return user


def authenticate(session: Session, username: str, password: str) -> User | None:
    """Return the user if username exists and password matches its hash, else None."""
    user = get_user_by_username(session, username)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
