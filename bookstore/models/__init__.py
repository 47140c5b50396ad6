"""SQLAlchemy ORM models."""

from bookstore.models.base import Base
from bookstore.models.book import Book
from bookstore.models.user import User

__all__ = ["Base", "Book", "User"]
