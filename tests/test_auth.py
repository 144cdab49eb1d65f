# tests/test_auth.py
from flask_jwt_extended import decode_token

from tests.conftest import PASSWORD, bearer, register


def test_register_returns_user_and_tokens(client):
    body = register(client)
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]
    assert body["accessToken"] and body["refreshToken"]


def test_register_token_carries_claims(app, client):
    body = register(client)
    with app.app_context():
        claims = decode_token(body["accessToken"])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["username"] == "alice"
    assert claims["role"] == "user"


def test_register_normalises_email(client):
    body = register(client, email="  Alice@Example.COM ")
    assert body["user"]["email"] == "alice@example.com"


def test_register_duplicate_is_conflict(client):
    register(client)
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "username": "alice2", "password": PASSWORD},
    )
    assert resp.status_code == 409

    resp = client.post(
        "/api/auth/register",
        json={"email": "other@example.com", "username": "alice", "password": PASSWORD},
    )
    assert resp.status_code == 409


def test_register_validation(client):
    cases = [
        {"email": "alice@example.com", "username": "alice"},
        {"email": "not-an-email", "username": "alice", "password": PASSWORD},
        {"email": "alice@example.com", "username": "al", "password": PASSWORD},
        {"email": "alice@example.com", "username": "a" * 21, "password": PASSWORD},
        {"email": "alice@example.com", "username": "alice", "password": "short"},
    ]
    for payload in cases:
        resp = client.post("/api/auth/register", json=payload)
        assert resp.status_code == 400, payload
        assert "message" in resp.get_json()


def test_login_with_email_or_username(client):
    register(client)
    for identifier in ("alice@example.com", "alice"):
        resp = client.post("/api/auth/login", json={"identifier": identifier, "password": PASSWORD})
        assert resp.status_code == 200
        assert resp.get_json()["user"]["username"] == "alice"

    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert resp.status_code == 200


def test_login_bad_credentials(client):
    register(client)
    resp = client.post("/api/auth/login", json={"identifier": "alice", "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "invalid credentials"

    resp = client.post("/api/auth/login", json={"identifier": "nobody", "password": PASSWORD})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "invalid credentials"


def test_me_requires_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401

    resp = client.get("/api/auth/me", headers=bearer("garbage"))
    assert resp.status_code == 422


def test_me_and_refresh(client):
    body = register(client)
    resp = client.get("/api/auth/me", headers=bearer(body["accessToken"]))
    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == body["user"]["id"]

    resp = client.post("/api/auth/refresh", headers=bearer(body["refreshToken"]))
    assert resp.status_code == 200
    assert resp.get_json()["accessToken"]

    # access tokens are not accepted for refresh
    resp = client.post("/api/auth/refresh", headers=bearer(body["accessToken"]))
    assert resp.status_code == 422


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Not found"}


def test_register_rejects_non_string_fields(client):
    payloads = [
        {"email": 123, "username": "alice", "password": PASSWORD},
        {"email": "alice@example.com", "username": ["alice"], "password": PASSWORD},
        {"email": "alice@example.com", "username": "alice", "password": 12345678},
    ]
    for payload in payloads:
        resp = client.post("/api/auth/register", json=payload)
        assert resp.status_code == 400, payload
        assert resp.get_json()["message"].endswith("must be a string")


def test_login_rejects_non_string_fields(client):
    register(client)
    resp = client.post("/api/auth/login", json={"identifier": 5, "password": PASSWORD})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "identifier must be a string"

    resp = client.post("/api/auth/login", json={"identifier": "alice", "password": 5})
    assert resp.status_code == 400
