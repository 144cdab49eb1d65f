# tests/conftest.py
import pytest

from config import TestingConfig
from healthtrack import create_app, db
from healthtrack.models.user import ROLE_ADMIN, User

PASSWORD = "password123"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email="alice@example.com", username="alice", password=PASSWORD):
    resp = client.post(
        "/api/auth/register",
        json={"email": email, "username": username, "password": password},
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    body = register(client)
    return bearer(body["accessToken"])


@pytest.fixture
def user_id(client, auth_headers):
    return client.get("/api/auth/me", headers=auth_headers).get_json()["user"]["id"]


def make_admin(app, client, email, username):
    register(client, email=email, username=username)
    with app.app_context():
        user = User.query.filter_by(email=email).first()
        user.role = ROLE_ADMIN
        db.session.commit()
    # role is carried in the token claims, so log in again after promotion
    resp = client.post("/api/auth/login", json={"identifier": email, "password": PASSWORD})
    return bearer(resp.get_json()["accessToken"])


@pytest.fixture
def admin_headers(app, client):
    return make_admin(app, client, "admin@example.com", "admin")
