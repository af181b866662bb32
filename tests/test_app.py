"""
Application-level tests - CSRF, заголовки безопасности, healthcheck, method override.
"""

import pytest

from app import create_app
from conftest import InMemoryConfig
from extensions import db
from models import User
from utils.method_override import MethodOverrideMiddleware


class CsrfConfig(InMemoryConfig):
    CSRF_ENABLED = True


@pytest.fixture
def csrf_app():
    app = create_app(CsrfConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_security_headers(client):
    response = client.get("/farms")
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_post_without_csrf_token_is_rejected(csrf_app):
    client = csrf_app.test_client()
    response = client.post("/register", data={"username": "farmer", "password": "pw"})
    assert response.status_code == 302
    assert response.headers["Location"] == "/farms"
    with csrf_app.app_context():
        assert User.query.count() == 0


def test_post_with_csrf_token_is_accepted(csrf_app):
    client = csrf_app.test_client()
    client.get("/register")
    with client.session_transaction() as sess:
        token = sess["csrf_token"]

    response = client.post(
        "/register",
        data={"username": "farmer", "password": "pw", "csrf_token": token},
    )
    assert response.headers["Location"] == "/farms"
    with csrf_app.app_context():
        assert User.query.count() == 1


@pytest.mark.parametrize(
    "method, query, expected",
    [
        ("POST", "_method=DELETE", "DELETE"),
        ("POST", "_method=put", "PUT"),
        ("POST", "_method=PATCH", "PATCH"),
        ("POST", "_method=GET", "POST"),
        ("POST", "", "POST"),
        ("GET", "_method=DELETE", "GET"),
    ],
)
def test_method_override_middleware(method, query, expected):
    seen = {}

    def inner(environ, start_response):
        seen["method"] = environ["REQUEST_METHOD"]
        return []

    MethodOverrideMiddleware(inner)({"REQUEST_METHOD": method, "QUERY_STRING": query}, None)
    assert seen["method"] == expected
