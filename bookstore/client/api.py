"""HTTP client for the Bookstore API that keeps its session between runs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from bookstore.client.session import SessionState, SessionStore, SessionUser, decode_token_claims
from bookstore.schemas.books import BookOut

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class BookstoreClientError(Exception):
    """Raised when login/register fail or the API cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _message_from(resp: httpx.Response, default: str = "Failed") -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or default
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return default


class BookstoreClient:
    """
    Client-side view of the catalog.

    Holds the token and the identity decoded from it, persisted through a
    SessionStore. A restored token and every new token re-fetch the book
    list; without a token the fetch is skipped. is_admin only gates what the
    caller offers to the user; the server enforces roles on every request.
    """

    def __init__(self, http: httpx.Client, session: SessionStore, api_prefix: str = API_PREFIX) -> None:
        self._http = http
        self._api_prefix = api_prefix.rstrip("/")
        self._session = session
        state = session.load()
        self._token = state.token
        self.user = state.user
        self.books: list[BookOut] = []
        if self._token:
            self.refresh_books()

    @classmethod
    def from_url(cls, base_url: str, session: SessionStore, timeout: float = 10.0) -> BookstoreClient:
        return cls(httpx.Client(base_url=base_url, timeout=timeout), session)

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        try:
            return self._http.request(method, f"{self._api_prefix}{path}", headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise BookstoreClientError(f"Bookstore API is unreachable: {e}") from e

    def _set_token(self, token: str | None) -> None:
        self._token = token
        self.user = decode_token_claims(token) if token else None
        self._session.save(SessionState(token=token, user=self.user))
        self.refresh_books()

    def refresh_books(self) -> list[BookOut]:
        """Fetch the book list. Skipped without a token; failures keep the previous list."""
        if not self._token:
            return self.books
        resp = self._request("GET", "/books")
        if resp.is_success:
            self.books = [BookOut.model_validate(item) for item in resp.json()]
        else:
            logger.debug("Book list refresh failed with status %s", resp.status_code)
        return self.books

    def register(self, username: str, password: str, role: str = "user") -> str:
        """Create an account. Returns the server message; raises BookstoreClientError on failure."""
        resp = self._request(
            "POST",
            "/register",
            json={"username": username, "password": password, "role": role},
        )
        if not resp.is_success:
            raise BookstoreClientError(_message_from(resp), resp.status_code)
        return _message_from(resp, default="User registered successfully")

    def login(self, username: str, password: str) -> SessionUser | None:
        """Log in, store the token and decoded identity, and refresh the book list."""
        resp = self._request("POST", "/login", json={"username": username, "password": password})
        token = None
        if resp.is_success:
            token = resp.json().get("token")
        if not token:
            raise BookstoreClientError(_message_from(resp), resp.status_code)
        self._set_token(token)
        return self.user

    def logout(self) -> None:
        self._token = None
        self.user = None
        self.books = []
        self._session.clear()

    def add_book(self, title: str, author: str) -> bool:
        resp = self._request("POST", "/books", json={"title": title, "author": author})
        if resp.is_success:
            self.refresh_books()
        return resp.is_success

    def update_book(self, book_id: str, title: str, author: str) -> bool:
        resp = self._request("PUT", f"/books/{book_id}", json={"title": title, "author": author})
        if resp.is_success:
            self.refresh_books()
        return resp.is_success

    def delete_book(self, book_id: str) -> bool:
        resp = self._request("DELETE", f"/books/{book_id}")
        if resp.is_success:
            self.refresh_books()
        return resp.is_success
