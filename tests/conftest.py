"""Shared fixtures: an app bound to a fresh in-memory SQLite database."""
from __future__ import annotations

import pytest

from library_api import create_app
from library_api.extensions import db


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "API_PREFIX": "/api/v1",
        "AUTO_CREATE_SCHEMA": True,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def create_book(client):
    def _create(**fields):
        payload = {"title": "Foo", "author": "Bar", "published_year": 2020}
        payload.update(fields)
        resp = client.post("/api/v1/books", json=payload)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["data"]

    return _create
