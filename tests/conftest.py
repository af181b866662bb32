"""
Pytest fixtures - приложение на in-memory SQLite, тестовый клиент и хелперы.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest

from app import create_app
from config import Config, build_engine_options
from extensions import db
from models import Farm, Product


class InMemoryConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = build_engine_options("sqlite://", 5)
    CSRF_ENABLED = False
    LOG_LEVEL = "WARNING"


@pytest.fixture
def app():
    app = create_app(InMemoryConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def other_client(app):
    return app.test_client()


def register(client, username="farmer", password="Secret-pass-1", **extra):
    form = {
        "firstName": "Old",
        "lastName": "McDonald",
        "email": f"{username}@example.com",
        "phone": "+1 555 010 0000",
        "username": username,
        "password": password,
    }
    form.update(extra)
    return client.post("/register", data=form)


def login(client, username="farmer", password="Secret-pass-1"):
    return client.post("/login", data={"username": username, "password": password})


def create_farm(client, name="Green Acres", city="Springfield", email="farm@example.com"):
    return client.post("/farms", data={"name": name, "city": city, "email": email})


def create_product(client, farm_id, name="Apple", price="1.50", category="fruit"):
    return client.post(
        f"/farms/{farm_id}/products",
        data={"name": name, "price": price, "category": category},
    )


def only(model, app):
    """Единственная запись модели в базе."""
    with app.app_context():
        records = model.query.all()
        assert len(records) == 1
        return records[0]


@pytest.fixture
def owner(client):
    register(client, "farmer")
    return client


@pytest.fixture
def farm_id(app, owner):
    create_farm(owner)
    return only(Farm, app).id


@pytest.fixture
def product_id(app, owner, farm_id):
    create_product(owner, farm_id)
    return only(Product, app).id


@pytest.fixture
def stranger(other_client):
    register(other_client, "stranger")
    return other_client

