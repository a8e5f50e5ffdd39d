"""Auth API tests: email, anonymous and Google sign-in, profile and password."""

from unittest.mock import MagicMock, patch

import pytest

pytestmark = pytest.mark.integration

from tryluck.core.auth.auth_service import issue_admin_token, ensure_admin
from tryluck.core.auth.password import hash_password
from tryluck.core.users.models import User
from tryluck.extensions import db

TOKENINFO = "tryluck.core.auth.google.requests.get"


def _tokeninfo(status=200, **claims):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = {
        "aud": "test-client-id.apps.googleusercontent.com",
        "iss": "https://accounts.google.com",
        "sub": "google-123",
        "email": "g.user@example.com",
        "name": "G User",
        "picture": "https://lh3.example/p.png",
        **claims,
    }
    return response


def _bearer(body):
    return {"Authorization": f"Bearer {body['token']}"}


class TestEmailAuth:
    def test_register_then_login(self, client):
        registered = client.post(
            "/api/v1/auth/register",
            json={"name": "Ada", "email": "Ada@Example.com", "password": "secret1"},
        )
        assert registered.status_code == 200
        assert registered.get_json()["user"]["email"] == "ada@example.com"
        assert registered.get_json()["user"]["authMethod"] == "email"

        login = client.post(
            "/api/v1/auth/login", json={"email": "ada@example.com", "password": "secret1"}
        )
        assert login.status_code == 200
        assert login.get_json()["user"]["lastActive"] is not None

    def test_duplicate_email(self, client, user):
        resp = client.post(
            "/api/v1/auth/register",
            json={"name": "Dup", "email": user.email, "password": "secret1"},
        )

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "email_already_exists"

    def test_short_password(self, client):
        resp = client.post(
            "/api/v1/auth/register", json={"name": "A", "email": "a@example.com", "password": "123"}
        )
        assert resp.status_code == 400

    def test_wrong_password(self, client, user_factory):
        user_factory("pw@example.com", password_hash=hash_password("right-one"))

        resp = client.post(
            "/api/v1/auth/login", json={"email": "pw@example.com", "password": "wrong-one"}
        )

        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_credentials"

    def test_passwordless_user_cannot_login(self, client, user):
        resp = client.post("/api/v1/auth/login", json={"email": user.email, "password": "anything"})
        assert resp.status_code == 401


class TestAnonymousAuth:
    def test_unique_synthetic_emails(self, client):
        first = client.post("/api/v1/auth/anonymous", json={}).get_json()
        second = client.post("/api/v1/auth/anonymous", json={"displayName": "Guest"}).get_json()

        assert first["user"]["email"] != second["user"]["email"]
        assert first["user"]["email"].endswith("@anonymous.local")
        assert first["user"]["displayName"] == "Anonymous"
        assert second["user"]["displayName"] == "Guest"
        assert first["user"]["authMethod"] == "anonymous"

    def test_anonymous_has_no_password_to_change(self, client):
        body = client.post("/api/v1/auth/anonymous", json={}).get_json()

        resp = client.put(
            "/api/v1/auth/password",
            json={"oldPassword": "x", "newPassword": "newpass"},
            headers=_bearer(body),
        )

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "no_password"


class TestGoogleAuth:
    def test_creates_user(self, client):
        with patch(TOKENINFO, return_value=_tokeninfo()) as mocked:
            resp = client.post("/api/v1/auth/google", json={"idToken": "abc"})

        assert resp.status_code == 200
        assert mocked.call_args.kwargs["params"] == {"id_token": "abc"}
        user = User.query.filter_by(google_id="google-123").one()
        assert user.auth_method == "google"
        assert user.display_name == "G User"

    def test_links_existing_email_account(self, client, user_factory):
        existing = user_factory("g.user@example.com", password_hash=hash_password("secret1"))

        with patch(TOKENINFO, return_value=_tokeninfo()):
            resp = client.post("/api/v1/auth/google", json={"idToken": "abc"})

        assert resp.get_json()["user"]["id"] == existing.id
        assert db.session.get(User, existing.id).google_id == "google-123"
        assert User.query.count() == 1

    def test_returning_google_user(self, client):
        with patch(TOKENINFO, return_value=_tokeninfo()):
            first = client.post("/api/v1/auth/google", json={"idToken": "abc"}).get_json()
            second = client.post("/api/v1/auth/google", json={"idToken": "def"}).get_json()

        assert first["user"]["id"] == second["user"]["id"]

    @pytest.mark.parametrize(
        "response",
        [
            _tokeninfo(status=400),
            _tokeninfo(aud="someone-else.apps.googleusercontent.com"),
            _tokeninfo(iss="https://evil.example"),
            _tokeninfo(email=""),
        ],
    )
    def test_rejected_tokens(self, client, response):
        with patch(TOKENINFO, return_value=response):
            resp = client.post("/api/v1/auth/google", json={"idToken": "bad"})

        assert resp.status_code == 401
        assert resp.get_json()["error"] == "invalid_google_token"
        assert User.query.count() == 0


class TestProfile:
    def test_me_and_profile_update(self, client, auth_headers):
        me = client.get("/api/v1/auth/me", headers=auth_headers)
        assert me.status_code == 200
        assert me.get_json()["user"]["email"] == "user@example.com"

        resp = client.put(
            "/api/v1/auth/profile",
            json={"displayName": "Renamed", "timezone": "Europe/Berlin"},
            headers=auth_headers,
        )

        user = resp.get_json()["user"]
        assert user["displayName"] == "Renamed"
        assert user["timezone"] == "Europe/Berlin"

    def test_unknown_timezone_rejected(self, client, auth_headers):
        resp = client.put("/api/v1/auth/profile", json={"timezone": "Mars/Base"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_change_password(self, client, user_factory):
        user_factory("pw@example.com", password_hash=hash_password("old-secret"))
        body = client.post(
            "/api/v1/auth/login", json={"email": "pw@example.com", "password": "old-secret"}
        ).get_json()

        wrong = client.put(
            "/api/v1/auth/password",
            json={"oldPassword": "nope", "newPassword": "new-secret"},
            headers=_bearer(body),
        )
        ok = client.put(
            "/api/v1/auth/password",
            json={"oldPassword": "old-secret", "newPassword": "new-secret"},
            headers=_bearer(body),
        )
        relogin = client.post(
            "/api/v1/auth/login", json={"email": "pw@example.com", "password": "new-secret"}
        )

        assert wrong.status_code == 400
        assert ok.get_json() == {"ok": True, "success": True}
        assert relogin.status_code == 200


class TestTokens:
    def test_missing_and_garbage_tokens(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401
        resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_admin_token_is_not_a_user(self, app, client):
        admin, _ = ensure_admin("root", "rootpass")

        resp = client.get(
            "/api/v1/habits", headers={"Authorization": f"Bearer {issue_admin_token(admin)}"}
        )

        assert resp.status_code == 401
