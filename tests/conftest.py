"""Shared pytest fixtures for lendtrack tests."""

import pytest

from lendtrack import create_app
from lendtrack.config import TestConfig
from lendtrack.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _register_and_login(client, username, email, name):
    resp = client.post("/auth/register", json={
        "username": username,
        "email": email,
        "password": "secret123",
        "name": name,
    })
    assert resp.status_code == 201
    resp = client.post("/auth/login", json={"username": username, "password": "secret123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    """Authorization header for a freshly registered user."""
    return _register_and_login(client, "ada", "ada@example.com", "Ada Lovelace")


@pytest.fixture
def other_headers(client):
    return _register_and_login(client, "bob", "bob@example.com", "Bob")


@pytest.fixture
def add_book(client, auth_headers):
    def _add(title="Dune", borrower="Charlie", borrowed="2024-01-01", deadline="2024-01-10", headers=None):
        resp = client.post("/books/", headers=headers or auth_headers, json={
            "title": title,
            "borrower_name": borrower,
            "borrowed_date": borrowed,
            "return_deadline": deadline,
        })
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["id"]
    return _add
