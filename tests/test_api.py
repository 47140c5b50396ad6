"""API tests: registration, login, the auth gate, and the book CRUD contract."""

import unittest
from datetime import UTC, datetime, timedelta

from bookstore import __version__
from bookstore.core.security import TokenService
from bookstore.models import Book, User
from bookstore.schemas.auth import TokenClaims
from tests.support import TEST_SECRET, auth, login_token, make_client, register


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()
        self.app = self.client.app

    def db_count(self, model: type) -> int:
        db = self.app.state.session_factory()
        try:
            return db.query(model).count()
        finally:
            db.close()

    def admin_token(self) -> str:
        register(self.client, "admin", "admin-pass", "admin")
        return login_token(self.client, "admin", "admin-pass")

    def user_token(self) -> str:
        register(self.client, "reader", "reader-pass")
        return login_token(self.client, "reader", "reader-pass")


class TestRoot(ApiTestCase):
    def test_liveness_is_plain_text(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.text, "Bookstore API is running")
        self.assertTrue(resp.headers["content-type"].startswith("text/plain"))

    def test_health_reports_database(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"status": "ok", "version": __version__, "environment": "dev", "database": "connected"},
        )


class TestRegister(ApiTestCase):
    """POST /api/register creates users once per username."""

    def test_register_twice(self) -> None:
        first = self.client.post("/api/register", json={"username": "alice", "password": "pw1"})
        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json(), {"message": "User registered successfully"})
        second = self.client.post("/api/register", json={"username": "alice", "password": "pw2"})
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json(), {"message": "User already exists"})
        self.assertEqual(self.db_count(User), 1)

    def test_role_defaults_to_user(self) -> None:
        register(self.client, "alice", "pw1")
        token = login_token(self.client, "alice", "pw1")
        self.assertEqual(TokenService(TEST_SECRET).verify(token).role, "user")

    def test_password_not_stored_in_plain_text(self) -> None:
        register(self.client, "alice", "plain-secret")
        db = self.app.state.session_factory()
        try:
            user = db.query(User).filter(User.username == "alice").one()
        finally:
            db.close()
        self.assertNotEqual(user.password_hash, "plain-secret")

    def test_unknown_role_rejected(self) -> None:
        resp = self.client.post(
            "/api/register", json={"username": "alice", "password": "pw", "role": "root"}
        )
        self.assertEqual(resp.status_code, 422)
        self.assertIn("message", resp.json())

    def test_missing_password_rejected(self) -> None:
        resp = self.client.post("/api/register", json={"username": "alice"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["message"], "Invalid request body.")

    def role_after_register(self, body: dict[str, object]) -> str:
        resp = self.client.post("/api/register", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        token = login_token(self.client, str(body["username"]), str(body["password"]))
        return TokenService(TEST_SECRET).verify(token).role

    def test_null_role_defaults_to_user(self) -> None:
        self.assertEqual(self.role_after_register({"username": "alice", "password": "pw", "role": None}), "user")

    def test_empty_role_defaults_to_user(self) -> None:
        self.assertEqual(self.role_after_register({"username": "bob", "password": "pw", "role": ""}), "user")

    def test_explicit_admin_role(self) -> None:
        self.assertEqual(self.role_after_register({"username": "carol", "password": "pw", "role": "admin"}), "admin")


class TestPasswordLength(ApiTestCase):
    """Passwords over bcrypt's 72-byte input are rejected, never truncated."""

    def test_72_bytes_accepted(self) -> None:
        self.assertEqual(register(self.client, "alice", "x" * 72), 201)
        login_token(self.client, "alice", "x" * 72)

    def test_73_bytes_rejected_at_register(self) -> None:
        self.assertEqual(register(self.client, "alice", "x" * 72 + "A"), 422)
        self.assertEqual(self.db_count(User), 0)

    def test_multibyte_length_counted_in_bytes(self) -> None:
        # 37 two-byte characters are 74 bytes
        self.assertEqual(register(self.client, "alice", "é" * 37), 422)

    def test_shared_72_byte_prefix_does_not_log_in(self) -> None:
        register(self.client, "alice", "x" * 72)
        resp = self.client.post("/api/login", json={"username": "alice", "password": "x" * 72 + "B"})
        self.assertNotEqual(resp.status_code, 200)
        self.assertNotIn("token", resp.json())


class TestLogin(ApiTestCase):
    """POST /api/login returns a token only for matching credentials."""

    def setUp(self) -> None:
        super().setUp()
        register(self.client, "alice", "wonderland", "admin")

    def test_success_returns_token_with_claims(self) -> None:
        resp = self.client.post("/api/login", json={"username": "alice", "password": "wonderland"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Login successful")
        claims = TokenService(TEST_SECRET).verify(body["token"])
        self.assertEqual((claims.username, claims.role), ("alice", "admin"))

    def test_wrong_password(self) -> None:
        resp = self.client.post("/api/login", json={"username": "alice", "password": "nope"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Invalid credentials"})

    def test_unknown_user(self) -> None:
        resp = self.client.post("/api/login", json={"username": "bob", "password": "wonderland"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "Invalid credentials"})


class TestAuthGate(ApiTestCase):
    """401 without a token, 403 for bad/expired tokens or the wrong role."""

    def test_no_header(self) -> None:
        resp = self.client.get("/api/books")
        self.assertEqual(resp.status_code, 401)
        self.assertIn("message", resp.json())
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_non_bearer_scheme_counts_as_missing(self) -> None:
        resp = self.client.get("/api/books", headers={"Authorization": "Basic YWxpY2U6cHc="})
        self.assertEqual(resp.status_code, 401)

    def test_garbage_bearer(self) -> None:
        resp = self.client.get("/api/books", headers=auth("garbage"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Invalid or expired token"})

    def test_expired_token(self) -> None:
        service = TokenService(TEST_SECRET)
        token = service.issue(
            TokenClaims(username="admin", role="admin"),
            now=datetime.now(UTC) - timedelta(minutes=61),
        )
        self.assertEqual(self.client.get("/api/books", headers=auth(token)).status_code, 403)

    def test_token_signed_elsewhere(self) -> None:
        token = TokenService("some-other-secret").issue(TokenClaims(username="admin", role="admin"))
        resp = self.client.post("/api/books", json={"title": "X", "author": "Y"}, headers=auth(token))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.db_count(Book), 0)

    def test_token_accepted_without_user_lookup(self) -> None:
        token = TokenService(TEST_SECRET).issue(TokenClaims(username="ghost", role="user"))
        self.assertEqual(self.client.get("/api/books", headers=auth(token)).status_code, 200)

    def test_non_admin_cannot_create(self) -> None:
        resp = self.client.post(
            "/api/books", json={"title": "Dune", "author": "Herbert"}, headers=auth(self.user_token())
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Admin access required"})
        self.assertEqual(self.db_count(Book), 0)

    def test_non_admin_cannot_update_or_delete(self) -> None:
        admin = auth(self.admin_token())
        book_id = self.client.post("/api/books", json={"title": "A", "author": "B"}, headers=admin).json()["book"]["_id"]
        user = auth(self.user_token())
        self.assertEqual(
            self.client.put(f"/api/books/{book_id}", json={"title": "X", "author": "Y"}, headers=user).status_code,
            403,
        )
        self.assertEqual(self.client.delete(f"/api/books/{book_id}", headers=user).status_code, 403)
        listed = self.client.get("/api/books", headers=user).json()
        self.assertEqual(listed, [{"_id": book_id, "title": "A", "author": "B"}])


class TestBooks(ApiTestCase):
    """The create/list/update/delete contract for admins."""

    def setUp(self) -> None:
        super().setUp()
        self.headers = auth(self.admin_token())

    def test_create_list_delete(self) -> None:
        created = self.client.post("/api/books", json={"title": "Dune", "author": "Herbert"}, headers=self.headers)
        self.assertEqual(created.status_code, 201)
        body = created.json()
        self.assertEqual(body["message"], "Book added")
        book_id = body["book"]["_id"]
        self.assertTrue(book_id)

        listed = self.client.get("/api/books", headers=self.headers)
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(listed.json(), [{"_id": book_id, "title": "Dune", "author": "Herbert"}])

        deleted = self.client.delete(f"/api/books/{book_id}", headers=self.headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"message": "Book deleted"})
        self.assertEqual(self.client.get("/api/books", headers=self.headers).json(), [])

        again = self.client.delete(f"/api/books/{book_id}", headers=self.headers)
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json(), {"message": "Book not found"})

    def test_any_authenticated_user_can_list(self) -> None:
        self.client.post("/api/books", json={"title": "Dune", "author": "Herbert"}, headers=self.headers)
        resp = self.client.get("/api/books", headers=auth(self.user_token()))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 1)

    def test_update(self) -> None:
        book_id = self.client.post(
            "/api/books", json={"title": "Dune", "author": "Herbert"}, headers=self.headers
        ).json()["book"]["_id"]
        resp = self.client.put(
            f"/api/books/{book_id}", json={"title": "Dune Messiah", "author": "Frank Herbert"}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"message": "Book updated", "book": {"_id": book_id, "title": "Dune Messiah", "author": "Frank Herbert"}},
        )

    def test_update_omitted_fields_become_empty(self) -> None:
        book_id = self.client.post(
            "/api/books", json={"title": "Dune", "author": "Herbert"}, headers=self.headers
        ).json()["book"]["_id"]
        resp = self.client.put(f"/api/books/{book_id}", json={"title": "Dune"}, headers=self.headers)
        self.assertEqual(resp.json()["book"]["author"], "")

    def test_update_missing_id(self) -> None:
        resp = self.client.put("/api/books/does-not-exist", json={"title": "T", "author": "A"}, headers=self.headers)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Book not found"})
        self.assertEqual(self.db_count(Book), 0)

    def test_create_requires_title_and_author(self) -> None:
        resp = self.client.post("/api/books", json={"title": "Dune"}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.db_count(Book), 0)


if __name__ == "__main__":
    unittest.main()
