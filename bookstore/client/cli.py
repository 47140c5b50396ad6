"""
Command-line client for the Bookstore API. The session survives between runs.

  bookstore-cli register alice s3cret [--role admin]
  bookstore-cli login alice s3cret
  bookstore-cli books
  bookstore-cli add "Dune" "Frank Herbert"
  bookstore-cli update <id> "Dune" "Frank Herbert"
  bookstore-cli delete <id>
  bookstore-cli whoami
  bookstore-cli logout
"""
import argparse
import logging
import sys
from pathlib import Path

import httpx
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookstore.client.api import BookstoreClient, BookstoreClientError
from bookstore.client.session import DEFAULT_SESSION_FILE, SessionStore


class ClientSettings(BaseSettings):
    """Client settings from BOOKSTORE_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="BOOKSTORE_", extra="ignore")

    API_URL: str = "http://localhost:5000"
    SESSION_FILE: Path = DEFAULT_SESSION_FILE
    TIMEOUT_SEC: float = 10.0

    @field_validator("API_URL")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError("BOOKSTORE_API_URL must use http or https (e.g. http://localhost:5000)")
        return v.strip().rstrip("/")

    @field_validator("TIMEOUT_SEC")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError("BOOKSTORE_TIMEOUT_SEC must be greater than 0 and at most 120")
        return v


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bookstore-cli", description="Bookstore API client.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="Create an account")
    p.add_argument("username")
    p.add_argument("password")
    p.add_argument("--role", default="user", choices=["user", "admin"])

    p = sub.add_parser("login", help="Log in and store the session")
    p.add_argument("username")
    p.add_argument("password")

    sub.add_parser("logout", help="Forget the stored session")
    sub.add_parser("whoami", help="Show the logged-in user")
    sub.add_parser("books", help="List books")

    p = sub.add_parser("add", help="Add a book (admin)")
    p.add_argument("title")
    p.add_argument("author")

    p = sub.add_parser("update", help="Replace a book's title and author (admin)")
    p.add_argument("book_id")
    p.add_argument("title")
    p.add_argument("author")

    p = sub.add_parser("delete", help="Delete a book (admin)")
    p.add_argument("book_id")
    return parser


def _print_books(client: BookstoreClient) -> None:
    if not client.books:
        print("No books.")
        return
    for book in client.books:
        print(f"{book.id}  {book.title} by {book.author}")


def run(args: argparse.Namespace, client: BookstoreClient) -> int:
    """Execute one parsed command against client. Returns the process exit code."""
    if args.command == "register":
        print(client.register(args.username, args.password, args.role))
        return 0
    if args.command == "login":
        user = client.login(args.username, args.password)
        print(f"Welcome, {user.username} ({user.role})" if user else "Logged in.")
        return 0
    if args.command == "logout":
        client.logout()
        print("Logged out.")
        return 0

    if client.token is None or client.user is None:
        print("Not logged in. Run: bookstore-cli login USERNAME PASSWORD", file=sys.stderr)
        return 1

    if args.command == "whoami":
        print(f"{client.user.username} ({client.user.role})")
        return 0
    if args.command == "books":
        client.refresh_books()
        _print_books(client)
        return 0

    if not client.is_admin:
        print("This command requires the admin role.", file=sys.stderr)
        return 1
    if args.command == "add":
        ok = client.add_book(args.title, args.author)
    elif args.command == "update":
        ok = client.update_book(args.book_id, args.title, args.author)
    else:
        ok = client.delete_book(args.book_id)
    if not ok:
        print(f"Could not {args.command} book.", file=sys.stderr)
        return 1
    _print_books(client)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    settings = ClientSettings()
    http = httpx.Client(base_url=settings.API_URL, timeout=settings.TIMEOUT_SEC)
    try:
        # A stored session fetches the book list on construction.
        client = BookstoreClient(http, SessionStore(settings.SESSION_FILE))
        return run(args, client)
    except BookstoreClientError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        http.close()


if __name__ == "__main__":
    sys.exit(main())
