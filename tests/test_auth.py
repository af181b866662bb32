"""
Auth tests - регистрация, вход с отложенным адресом возврата, выход.
"""

from conftest import login, register
from models import User


def _session_user(client):
    with client.session_transaction() as sess:
        return sess.get("_user_id")


def test_register_logs_user_in(app, client):
    response = register(client, "farmer")
    assert response.status_code == 302
    assert response.headers["Location"] == "/farms"
    assert _session_user(client) is not None

    with app.app_context():
        user = User.query.filter_by(username="farmer").one()
        assert user.password_hash != "Secret-pass-1"
        assert user.email == "farmer@example.com"
        assert user.phone == "+15550100000"
        assert user.first_name == "Old"

    listing = client.get("/farms")
    assert b"Welcome to Farm Grocery" in listing.data


def test_duplicate_username_flashes_error_without_session(app, client, other_client):
    register(client, "farmer")

    response = register(other_client, "farmer", password="Another-pass-2")
    assert response.status_code == 302
    assert response.headers["Location"] == "/register"
    assert _session_user(other_client) is None

    page = other_client.get("/register")
    assert b"A user with the given username is already registered." in page.data
    with app.app_context():
        assert User.query.count() == 1


def test_register_rejects_missing_password(app, client):
    response = register(client, "farmer", password="")
    assert response.headers["Location"] == "/register"
    assert _session_user(client) is None


def test_register_rejects_malformed_email(app, client):
    response = register(client, "farmer", email="nope")
    assert response.headers["Location"] == "/register"
    with app.app_context():
        assert User.query.count() == 0


def test_login_with_wrong_password(client, other_client):
    register(client, "farmer")

    response = login(other_client, password="wrong")
    assert response.status_code == 302
    assert response.headers["Location"] == "/login"
    assert _session_user(other_client) is None
    assert b"Invalid username or password." in other_client.get("/login").data


def test_login_return_to_is_consumed_once(client, other_client):
    register(client, "farmer")

    denied = other_client.get("/farms/new")
    assert denied.headers["Location"] == "/login"
    with other_client.session_transaction() as sess:
        assert sess["return_to"] == "/farms/new"

    first = login(other_client)
    assert first.headers["Location"] == "/farms/new"
    with other_client.session_transaction() as sess:
        assert "return_to" not in sess

    other_client.get("/logout")
    second = login(other_client)
    assert second.headers["Location"] == "/farms"


def test_return_to_keeps_query_string(client):
    client.get("/products/1/edit?from=list")
    with client.session_transaction() as sess:
        assert sess["return_to"] == "/products/1/edit?from=list"


def test_return_to_ignores_external_urls(client, other_client):
    register(client, "farmer")
    with other_client.session_transaction() as sess:
        sess["return_to"] = "//evil.example.com/"

    response = login(other_client)
    assert response.headers["Location"] == "/farms"


def test_logout_clears_session_identity(client):
    register(client, "farmer")
    response = client.get("/logout")
    assert response.status_code == 302
    assert response.headers["Location"] == "/farms"
    assert _session_user(client) is None
    assert b"See you soon!" in client.get("/farms").data


def test_unauthenticated_flash_message(client):
    response = client.get("/farms/new", follow_redirects=True)
    assert response.status_code == 200
    assert b"You must be signed in first!" in response.data
