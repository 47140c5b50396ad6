"""Python client and CLI for the Bookstore API."""

from bookstore.client.api import BookstoreClient, BookstoreClientError
from bookstore.client.session import SessionState, SessionStore, SessionUser, decode_token_claims

__all__ = [
    "BookstoreClient",
    "BookstoreClientError",
    "SessionState",
    "SessionStore",
    "SessionUser",
    "decode_token_claims",
]
