"""Data access layer tests."""

from __future__ import annotations

import sqlite3
from datetime import datetime

import pytest

from campus_events import workflow
from campus_events.data_access import bookings_dao, events_dao, profiles_dao, resources_dao
from campus_events.data_access.db import execute, get_db, parse_timestamp, query_one, transaction
from campus_events.models.entities import Role


def test_resource_crud_flow(app):
    with app.app_context():
        resource = resources_dao.create_resource(
            name="Podcast Booth",
            resource_type="av_equipment",
            location="Media Center",
            capacity=2,
        )
        assert resource.available is True

        resources_dao.update_resource(resource.id, name="Podcast Studio", capacity=3)
        fetched = resources_dao.get_resource_by_id(resource.id)
        assert fetched.name == "Podcast Studio"
        assert fetched.capacity == 3

        assert resources_dao.toggle_availability(resource.id) is False
        assert resources_dao.get_resource_by_id(resource.id).available is False
        assert resource.id not in {r.id for r in resources_dao.list_resources(available_only=True)}

        resources_dao.delete_resource(resource.id)
        assert resources_dao.get_resource_by_id(resource.id) is None
        assert resources_dao.toggle_availability(resource.id) is None


def test_invalid_resource_values(app):
    with app.app_context():
        with pytest.raises(ValueError):
            resources_dao.create_resource(name="Hovercraft", resource_type="vehicle")
        with pytest.raises(sqlite3.IntegrityError):
            resources_dao.create_resource(name="Negative Room", resource_type="room", capacity=-1)


def test_deleting_resource_removes_its_bookings(app, pending_event):
    with app.app_context():
        bookings = bookings_dao.list_bookings_for_event(pending_event.id)
        assert bookings
        resources_dao.delete_resource(bookings[0].resource_id)
        assert bookings_dao.list_bookings_for_event(pending_event.id) == []


def test_transition_status_only_from_expected_state(app, pending_event):
    with app.app_context():
        assert events_dao.transition_status(pending_event.id, "approved", "rejected") is False
        assert events_dao.transition_status(pending_event.id, "pending_approval", "approved") is True
        with pytest.raises(ValueError):
            events_dao.transition_status(pending_event.id, "approved", "archived")


def test_status_check_constraint(app, organizer_user):
    with app.app_context():
        with pytest.raises(ValueError):
            events_dao.create_event(organizer_user.id, "Bad", "2030-01-01T10:00:00", "2030-01-01T11:00:00", status="pending")
        with pytest.raises(sqlite3.IntegrityError):
            execute(get_db(), "UPDATE events SET status = 'pending' WHERE id = 1")


def test_count_by_status_scopes_to_organizer(app, organizer_user, admin_user):
    with app.app_context():
        workflow.submit_event(admin_user.id, "Admin Social", datetime(2030, 6, 1, 18), datetime(2030, 6, 1, 20))
        everyone = events_dao.count_by_status()
        organizer = events_dao.count_by_status(organizer_id=organizer_user.id)
        assert everyone["pending_approval"] == organizer["pending_approval"] + 1
        assert set(everyone) == {"draft", "pending_approval", "approved", "rejected", "cancelled"}


def test_list_events_starts_after(app):
    with app.app_context():
        future = events_dao.list_events(status="approved", starts_after=datetime(2000, 1, 1))
        assert future
        assert events_dao.list_events(status="approved", starts_after=datetime(2999, 1, 1)) == []


def test_set_role_and_profile_updates(app, student_user):
    with app.app_context():
        profiles_dao.set_role(student_user.id, Role.ORGANIZER)
        assert profiles_dao.get_profile_by_id(student_user.id).role is Role.ORGANIZER
        with pytest.raises(ValueError):
            profiles_dao.set_role(student_user.id, "dean")

        profiles_dao.update_profile(student_user.id, phone="555-0100", email="ignored@campus.edu")
        updated = profiles_dao.get_profile_by_id(student_user.id)
        assert updated.phone == "555-0100"
        assert updated.email == student_user.email


def test_transaction_rolls_back_on_error(app):
    with app.app_context():
        db = get_db()
        with pytest.raises(RuntimeError):
            with transaction(db):
                execute(db, "INSERT INTO resources (name, type) VALUES ('Ghost Room', 'room')")
                raise RuntimeError("abort")
        assert query_one(db, "SELECT 1 FROM resources WHERE name = 'Ghost Room'") is None


def test_parse_timestamp_accepts_both_separators(app, approved_event):
    expected = datetime(2030, 3, 1, 10, 0)
    assert parse_timestamp("2030-03-01 10:00:00") == expected
    assert parse_timestamp("2030-03-01T10:00:00") == expected
    with app.app_context():
        stored = events_dao.get_event_by_id(approved_event.id)
        assert isinstance(stored.created_at, datetime)
        assert stored.start_time == approved_event.start_time
