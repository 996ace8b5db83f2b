"""Integration tests for /users endpoints and the token guard."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from shared.rsa_keys import encrypt_with_public_key
from shared.tokens import issue_token


class TestSignupAndLogin:
    def test_signup_then_login(self, client, settings, signup):
        _, _, body = signup()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "a@b.com"
        assert set(body["user"]) == {"id", "firstName", "lastName", "email"}

        resp = client.post("/users/login", json={"email": "a@b.com", "password": "Secret123"})
        assert resp.status_code == 200
        claims = jwt.decode(
            resp.json()["token"], settings.jwt.jwt_secret, algorithms=["HS256"]
        )
        assert claims["email"] == "a@b.com"
        assert claims["domain"] == "localhost"

    def test_login_sets_http_only_cookie(self, client, signup):
        signup()
        resp = client.post("/users/login", json={"email": "a@b.com", "password": "Secret123"})
        cookie = resp.headers["set-cookie"]
        assert cookie.startswith("jwt=")
        assert "HttpOnly" in cookie

    def test_wrong_password(self, client, signup):
        signup()
        resp = client.post("/users/login", json={"email": "a@b.com", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid email or password"

    def test_unknown_email_same_message(self, client):
        resp = client.post("/users/login", json={"email": "x@y.com", "password": "nope"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid email or password"

    def test_duplicate_signup(self, client, signup):
        signup()
        resp = client.post(
            "/users/signup",
            json={"firstName": "A", "lastName": "B", "email": "A@B.com", "password": "x"},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "conflict"

    def test_missing_field(self, client):
        resp = client.post("/users/signup", json={"email": "a@b.com", "password": "x"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "validation_error"

    def test_store_unavailable(self, client, user_repo):
        user_repo.fail = True
        resp = client.post("/users/login", json={"email": "a@b.com", "password": "x"})
        assert resp.status_code == 500
        assert resp.json()["code"] == "dependency_error"

    def test_logout_clears_cookie(self, client):
        resp = client.post("/users/logout")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Logout successful"}
        assert 'jwt=""' in resp.headers["set-cookie"] or "Max-Age=0" in resp.headers["set-cookie"]


class TestGuard:
    def test_no_token(self, client):
        resp = client.get("/users/check-auth")
        assert resp.status_code == 401
        assert resp.json()["message"] == "Authentication required"

    def test_valid_token(self, client, signup):
        _, headers, _ = signup()
        resp = client.get("/users/check-auth", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"isAuthenticated": True}

    def test_garbage_token(self, client):
        resp = client.get("/users/check-auth", headers={"Authorization": "Bearer junk"})
        assert resp.status_code == 403
        assert resp.json()["message"] == "Invalid token"

    def test_expired_token(self, client, settings, signup):
        _, _, body = signup()
        stale = issue_token(
            body["user"]["id"],
            "a@b.com",
            "localhost",
            settings.jwt,
            now=datetime.now(timezone.utc) - timedelta(hours=25),
        )
        resp = client.get("/users/check-auth", headers={"Authorization": f"Bearer {stale}"})
        assert resp.status_code == 403
        assert resp.json()["message"] == "Invalid token"

    def test_token_from_other_domain(self, client, signup):
        _, headers, _ = signup()
        resp = client.get(
            "/users/check-auth",
            headers={**headers, "Origin": "https://evil.example.com"},
        )
        assert resp.status_code == 403
        assert resp.json()["message"] == "Invalid domain"

    def test_referer_used_without_origin(self, app, signup):
        _, headers, _ = signup()
        with TestClient(app) as bare:
            ok = bare.get(
                "/users/check-auth",
                headers={**headers, "Referer": "http://localhost:5173/dashboard"},
            )
            missing = bare.get("/users/check-auth", headers=headers)
        assert ok.status_code == 200
        assert missing.status_code == 403
        assert missing.json()["message"] == "Invalid domain"

    def test_cookie_alone_is_not_enough(self, client, signup):
        signup()
        resp = client.get("/users/check-auth")
        assert resp.status_code == 401


class TestProfile:
    def test_me_hides_secrets(self, client, signup):
        _, headers, _ = signup()
        client.post("/users/api-key", headers=headers)
        client.get("/users/public-key", headers=headers)
        user = client.get("/users/me", headers=headers).json()["user"]
        assert user["email"] == "a@b.com"
        for secret in ("passwordHash", "password", "apiKey", "rsaKeys", "privateKey"):
            assert secret not in user

    def test_update_profile(self, client, signup):
        _, headers, _ = signup()
        resp = client.put(
            "/users/profile",
            headers=headers,
            json={"about": "Builder", "seo": {"title": "Ada", "keywords": ["python"]}},
        )
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["about"] == "Builder"
        assert user["seo"]["keywords"] == ["python"]


class TestKeys:
    def test_public_key_provisioned_once(self, client, signup):
        _, headers, _ = signup()
        first = client.get("/users/public-key", headers=headers).json()["publicKey"]
        second = client.get("/users/public-key", headers=headers).json()["publicKey"]
        assert first.startswith("-----BEGIN PUBLIC KEY-----")
        assert first == second

    def test_regenerate_public_key(self, client, signup):
        _, headers, _ = signup()
        first = client.get("/users/public-key", headers=headers).json()["publicKey"]
        regenerated = client.post("/users/public-key", headers=headers).json()["publicKey"]
        assert regenerated != first

    def test_api_key_absent(self, client, signup):
        _, headers, _ = signup()
        assert client.get("/users/api-key", headers=headers).status_code == 204

    def test_api_key_generated(self, client, signup):
        _, headers, _ = signup()
        created = client.post("/users/api-key", headers=headers).json()["apiKey"]
        assert len(created) == 64
        assert client.get("/users/api-key", headers=headers).json()["apiKey"] == created

    def test_endpoints_require_token(self, client):
        for method, path in [
            ("get", "/users/public-key"),
            ("post", "/users/public-key"),
            ("get", "/users/api-key"),
            ("post", "/users/api-key"),
            ("get", "/users/me"),
        ]:
            assert getattr(client, method)(path).status_code == 401, path


class TestApiKeyAuth:
    def _provision(self, client, headers):
        public_key = client.get("/users/public-key", headers=headers).json()["publicKey"]
        api_key = client.post("/users/api-key", headers=headers).json()["apiKey"]
        return public_key, api_key

    def test_round_trip(self, client, settings, signup):
        _, headers, _ = signup()
        public_key, api_key = self._provision(client, headers)
        resp = client.post(
            "/users/auth/api-key",
            json={"email": "a@b.com", "encryptedKey": encrypt_with_public_key(api_key, public_key)},
        )
        assert resp.status_code == 200
        claims = jwt.decode(resp.json()["token"], settings.jwt.jwt_secret, algorithms=["HS256"])
        assert claims["email"] == "a@b.com"
        assert claims["domain"] == "localhost"

    @pytest.mark.parametrize("payload", ["some-other-string", ""], ids=["wrong_key", "empty"])
    def test_wrong_key(self, client, signup, payload):
        _, headers, _ = signup()
        public_key, _ = self._provision(client, headers)
        resp = client.post(
            "/users/auth/api-key",
            json={"email": "a@b.com", "encryptedKey": encrypt_with_public_key(payload, public_key)},
        )
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid email or API key"

    def test_stale_ciphertext_after_regeneration(self, client, signup):
        _, headers, _ = signup()
        public_key, api_key = self._provision(client, headers)
        stale = encrypt_with_public_key(api_key, public_key)
        client.post("/users/public-key", headers=headers)
        resp = client.post(
            "/users/auth/api-key", json={"email": "a@b.com", "encryptedKey": stale}
        )
        assert resp.status_code == 401

    def test_malformed_ciphertext(self, client, signup):
        _, headers, _ = signup()
        self._provision(client, headers)
        resp = client.post(
            "/users/auth/api-key", json={"email": "a@b.com", "encryptedKey": "%%%"}
        )
        assert resp.status_code == 401

    def test_line_wrapped_ciphertext(self, client, signup):
        _, headers, _ = signup()
        public_key, api_key = self._provision(client, headers)
        ciphertext = encrypt_with_public_key(api_key, public_key)
        wrapped = "\n".join(ciphertext[i : i + 76] for i in range(0, len(ciphertext), 76))
        resp = client.post(
            "/users/auth/api-key", json={"email": "a@b.com", "encryptedKey": wrapped + "\n"}
        )
        assert resp.status_code == 200
