"""Catalog store: list, create, replace and delete books."""

import logging

from sqlalchemy.orm import Session

from bookstore.models import Book

logger = logging.getLogger(__name__)


def list_books(session: Session) -> list[Book]:
    """Return every book; no filtering or pagination."""
    return session.query(Book).all()


def create_book(session: Session, title: str, author: str) -> Book:
    book = Book(title=title, author=author)
    session.add(book)
    session.commit()
    session.refresh(book)
    logger.info("Book created", extra={"book_id": book.id})
    return book


def update_book(session: Session, book_id: str, title: str, author: str) -> Book | None:
    """Replace title and author of the book. Returns None if no book has that id."""
    book = session.get(Book, book_id)
    if book is None:
        return None
    book.title = title
    book.author = author
    session.commit()
    session.refresh(book)
    logger.info("Book updated", extra={"book_id": book.id})
    return book


def delete_book(session: Session, book_id: str) -> bool:
    """Delete the book. Returns False if no book has that id."""
    book = session.get(Book, book_id)
    if book is None:
        return False
    session.delete(book)
    session.commit()
    logger.info("Book deleted", extra={"book_id": book_id})
    return True
