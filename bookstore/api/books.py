"""Book catalog routes: any authenticated user can list; only admins can change."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bookstore.api.auth import get_current_user, require_admin
from bookstore.core.database import get_db
from bookstore.schemas.auth import CurrentUser, MessageResponse
from bookstore.schemas.books import BookCreate, BookMutationResponse, BookOut, BookUpdate
from bookstore.services import books as book_store

router = APIRouter()

BOOK_NOT_FOUND = "Book not found"


@router.get("", response_model=list[BookOut])
def list_books(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[BookOut]:
    """Return every book in the catalog."""
    return [BookOut.model_validate(b) for b in book_store.list_books(db)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BookMutationResponse)
def create_book(
    body: BookCreate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> BookMutationResponse:
    book = book_store.create_book(db, body.title, body.author)
    return BookMutationResponse(message="Book added", book=BookOut.model_validate(book))


@router.put("/{book_id}", response_model=BookMutationResponse)
def update_book(
    book_id: str,
    body: BookUpdate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> BookMutationResponse:
    """Replace title and author of a book (admin only). Omitted fields become empty."""
    book = book_store.update_book(db, book_id, body.title, body.author)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOK_NOT_FOUND)
    return BookMutationResponse(message="Book updated", book=BookOut.model_validate(book))


@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(
    book_id: str,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    if not book_store.delete_book(db, book_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOK_NOT_FOUND)
    return MessageResponse(message="Book deleted")
