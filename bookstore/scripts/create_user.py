"""
Create a user (e.g. the first admin) directly in the database. Run from project root:
  python -m bookstore.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m bookstore.scripts.create_user admin your-secure-password admin

Only DATABASE_URL (and optionally BCRYPT_ROUNDS) is read; JWT_SECRET is not needed.
"""
import argparse
import sys

from dotenv import load_dotenv

from bookstore.core.config import get_database_settings
from bookstore.core.database import build_engine, build_session_factory
from bookstore.schemas.auth import PASSWORD_MAX_BYTES, USERNAME_MAX_LEN
from bookstore.services.users import UserExistsError, create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a bookstore user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_BYTES} bytes)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        print(f"Password must be 1-{PASSWORD_MAX_BYTES} bytes.", file=sys.stderr)
        return 1

    settings = get_database_settings()
    db = build_session_factory(build_engine(settings))()
    try:
        create_user(db, username, args.password, args.role, settings.BCRYPT_ROUNDS)
    except UserExistsError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
