"""Search and filter helper tests."""

from __future__ import annotations

from datetime import datetime

from campus_events.filters import filter_events, filter_resources
from campus_events.models.entities import Event, Resource

NOW = datetime(2030, 1, 1, 9, 0)


def _resource(resource_id: int, name: str, resource_type: str, location: str | None = None, description: str | None = None):
    return Resource(
        id=resource_id,
        name=name,
        type=resource_type,
        location=location,
        capacity=None,
        available=True,
        description=description,
        created_at=NOW,
    )


def _event(event_id: int, title: str, status: str, description: str | None = None):
    return Event(
        id=event_id,
        organizer_id=1,
        title=title,
        description=description,
        location=None,
        start_time=NOW,
        end_time=NOW,
        expected_attendees=None,
        notes=None,
        status=status,
        created_at=NOW,
    )


CATALOG = [
    _resource(1, "Main Auditorium", "room", "Building A"),
    _resource(2, "Seminar Room 2.14", "room", "Library"),
    _resource(3, "Portable PA System", "av_equipment", "Media Center", "Speakers for the auditorium"),
    _resource(4, "Folding Tables", "furniture", "Facilities Store"),
]


def test_type_filter_returns_exact_subset():
    rooms = filter_resources(CATALOG, resource_type="room")
    assert [resource.id for resource in rooms] == [1, 2]
    assert all(resource.type == "room" for resource in rooms)


def test_search_and_type_intersect():
    matches = filter_resources(CATALOG, search="auditorium", resource_type="room")
    assert [resource.id for resource in matches] == [1]

    search_only = filter_resources(CATALOG, search="AUDITORIUM")
    assert [resource.id for resource in search_only] == [1, 3]


def test_search_matches_location():
    assert [resource.id for resource in filter_resources(CATALOG, search="library")] == [2]


def test_blank_and_all_disable_criteria():
    assert filter_resources(CATALOG, search="   ", resource_type="all") == CATALOG
    assert filter_resources(CATALOG) == CATALOG


def test_event_filters():
    events = [
        _event(1, "Tech Talk", "pending_approval", "Talks about compilers"),
        _event(2, "Welcome Mixer", "approved"),
        _event(3, "Compiler Night", "approved"),
    ]
    assert [event.id for event in filter_events(events, status="approved")] == [2, 3]
    assert [event.id for event in filter_events(events, search="compiler")] == [1, 3]
    assert [event.id for event in filter_events(events, search="compiler", status="approved")] == [3]
    assert filter_events(events, status="all") == events


def test_search_for_the_word_all_is_still_a_search():
    events = [_event(1, "Football Final", "approved"), _event(2, "Tech Talk", "approved")]
    assert [event.id for event in filter_events(events, search="all")] == [1]

    halls = [_resource(1, "Great Hall", "room"), _resource(2, "Seminar Room", "room")]
    assert [resource.id for resource in filter_resources(halls, search="all", resource_type="room")] == [1]
