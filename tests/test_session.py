"""Session provider and role-derived navigation tests."""

from __future__ import annotations

import pytest
from flask import Flask

from campus_events.app import session_provider
from campus_events.models.entities import Role
from campus_events.session import (
    SIGNED_IN,
    SIGNED_OUT,
    SessionProvider,
    home_endpoint_for,
    navigation_for,
)


def _labels(role: Role) -> list[str]:
    return [item.label for item in navigation_for(role)]


def test_navigation_is_role_specific():
    assert "Approvals" in _labels(Role.ADMIN)
    assert "Approvals" not in _labels(Role.ORGANIZER)
    assert "New Event" in _labels(Role.ORGANIZER)
    assert _labels(Role.STUDENT) == ["Events", "Resources", "Settings"]


def test_navigation_rejects_unknown_roles():
    with pytest.raises(ValueError):
        navigation_for("superuser")  # type: ignore[arg-type]


def test_navigation_endpoints_resolve(app):
    with app.test_request_context():
        from flask import url_for

        for role in Role:
            for item in navigation_for(role):
                assert url_for(item.endpoint)


def test_home_endpoints():
    assert home_endpoint_for(Role.STUDENT) == "events.list_events"
    assert home_endpoint_for(Role.ORGANIZER) == "dashboard.index"
    assert home_endpoint_for(Role.ADMIN) == "dashboard.index"


def test_role_permissions():
    assert Role.ADMIN.can_approve and Role.ADMIN.can_manage_resources and Role.ADMIN.sees_all_events
    assert Role.ORGANIZER.can_create_events and not Role.ORGANIZER.can_approve
    assert Role.STUDENT.can_register and not Role.STUDENT.can_create_events
    assert Role.parse("organizer") is Role.ORGANIZER
    assert Role.parse("dean") is None


def test_subscribe_notify_and_unsubscribe(organizer_user):
    provider = SessionProvider()
    seen = []
    unsubscribe = provider.subscribe(lambda event, profile: seen.append((event, profile.email)))

    provider.notify(SIGNED_IN, organizer_user)
    unsubscribe()
    provider.notify(SIGNED_OUT, organizer_user)

    assert seen == [(SIGNED_IN, organizer_user.email)]


def test_sign_in_and_out_notify_subscribers(client, login_as):
    seen = []

    def record(event, profile):
        seen.append((event, profile.email))

    unsubscribe = session_provider.subscribe(record)
    try:
        login_as("alice@student.edu")
        client.get("/auth/logout")
    finally:
        unsubscribe()

    assert (SIGNED_IN, "alice@student.edu") in seen
    assert seen[-1] == (SIGNED_OUT, "alice@student.edu")


def test_teardown_drops_subscribers(app, admin_user):
    provider = SessionProvider(app)
    seen = []
    provider.subscribe(lambda event, profile: seen.append(event))
    provider.teardown(app)
    provider.notify(SIGNED_IN, admin_user)
    assert seen == []
    assert "session_provider" not in app.extensions


def test_teardown_disconnects_the_given_app(app, login_as):
    provider = SessionProvider(app)
    seen = []
    provider.subscribe(lambda event, profile: seen.append((event, profile.email)))
    login_as("alice@student.edu")
    assert (SIGNED_IN, "alice@student.edu") in seen

    provider.teardown(app)
    provider.subscribe(lambda event, profile: seen.append((event, profile.email)))
    seen.clear()
    login_as("ben@student.edu")
    assert seen == []
    assert not any(isinstance(value, Flask) for value in vars(provider).values())


def test_navigation_is_rendered_for_role(client, login_as):
    response = login_as("ada.admin@campus.edu")
    assert b"Approvals" in response.data
    assert b"Administrator" in response.data

    response = login_as("alice@student.edu")
    assert b"Approvals" not in response.data
