"""ORM model for catalog books."""

import uuid

from sqlalchemy import Column, String, Text

from bookstore.models.base import Base


def new_book_id() -> str:
    return uuid.uuid4().hex


class Book(Base):
    """A catalog entry. Created, replaced and deleted by admins only."""

    __tablename__ = "books"

    id = Column(String(32), primary_key=True, default=new_book_id)
    title = Column(Text, nullable=False, default="")
    author = Column(Text, nullable=False, default="")
