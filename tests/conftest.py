"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Generator

import pytest
from flask import Flask

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from campus_events.app import create_app
from campus_events.config import TestingConfig
from campus_events.data_access import events_dao, profiles_dao, resources_dao, seed
from campus_events.data_access.db import get_db, init_db


class _TestConfig(TestingConfig):
    DATABASE_URL: str = ""


@pytest.fixture()
def app(tmp_path: Path) -> Generator[Flask, None, None]:
    """Configure a Flask application for testing with a temp SQLite database."""

    db_path = tmp_path / "test.db"
    _TestConfig.DATABASE_URL = f"sqlite:///{db_path}"
    application = create_app(_TestConfig)
    with application.app_context():
        init_db(application)
        seed.seed()
    yield application


@pytest.fixture()
def client(app: Flask):
    """Flask test client."""

    return app.test_client()


@pytest.fixture()
def runner(app: Flask):
    """Flask CLI runner."""

    return app.test_cli_runner()


@pytest.fixture()
def db(app: Flask):
    """Provide a database connection for direct queries."""

    with app.app_context():
        yield get_db()


@pytest.fixture()
def admin_user(app: Flask):
    with app.app_context():
        return profiles_dao.get_profile_by_email("ada.admin@campus.edu")


@pytest.fixture()
def organizer_user(app: Flask):
    with app.app_context():
        return profiles_dao.get_profile_by_email("oscar.organizer@campus.edu")


@pytest.fixture()
def student_user(app: Flask):
    with app.app_context():
        return profiles_dao.get_profile_by_email("alice@student.edu")


@pytest.fixture()
def pending_event(app: Flask):
    with app.app_context():
        events = events_dao.list_events(status="pending_approval")
        return events[0]


@pytest.fixture()
def approved_event(app: Flask):
    with app.app_context():
        events = events_dao.list_events(status="approved")
        return events[0]


@pytest.fixture()
def available_room(app: Flask):
    with app.app_context():
        for resource in resources_dao.list_resources(available_only=True):
            if resource.type == "room":
                return resource
        raise AssertionError("Expected an available room in seed data.")


@pytest.fixture()
def unavailable_resource(app: Flask):
    with app.app_context():
        for resource in resources_dao.list_resources():
            if not resource.available:
                return resource
        raise AssertionError("Expected an unavailable resource in seed data.")


def login(client, email: str, password: str = seed.SEED_PASSWORD):
    return client.post(
        "/auth/login",
        data={"email": email, "password": password},
        follow_redirects=True,
    )


@pytest.fixture()
def login_as(client):
    """Return a helper that signs the test client in as the given email."""

    def _login(email: str):
        client.get("/auth/logout", follow_redirects=True)
        return login(client, email)

    return _login
