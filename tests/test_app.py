"""App wiring: health, error envelopes, schema bootstrap and CLI."""
from __future__ import annotations

import logging
from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from library_api import _log_level
from library_api.db_schema import SAMPLE_BOOKS, seed_sample_books
from library_api.extensions import db
from library_api.models.book import Book


def test_health_at_root_and_versioned_path(client):
    for path in ("/health", "/api/v1/health"):
        resp = client.get(path)
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["status"] == "healthy"
        assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/v1/authors")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Not Found"}


def test_wrong_method_uses_envelope(client):
    resp = client.patch("/api/v1/books/1", json={})
    assert resp.status_code == 405
    assert resp.get_json()["success"] is False


def test_log_level_from_config():
    assert _log_level("debug") == logging.DEBUG
    assert _log_level("WARNING") == logging.WARNING
    assert _log_level("chatty") == logging.INFO


def test_seed_only_fills_an_empty_table(app):
    with app.app_context():
        assert seed_sample_books(db.session) == len(SAMPLE_BOOKS)
        assert seed_sample_books(db.session) == 0
        assert db.session.scalar(select(func.count()).select_from(Book)) == len(SAMPLE_BOOKS)


def test_init_db_command_seeds(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["init-db", "--seed"])

    assert result.exit_code == 0
    assert "Added 10 sample books." in result.output
    with app.app_context():
        assert db.session.scalar(select(func.count()).select_from(Book)) == 10


def test_check_constraint_guards_published_year(app):
    with app.app_context():
        db.session.add(Book(title="T", author="A", published_year=3000))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()
