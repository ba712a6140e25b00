"""Event submission, approval, and registration workflows.

Each operation that touches more than one table runs inside a single
database transaction, so a failure midway leaves no partial writes behind.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Iterable, Optional

from flask import current_app

from .data_access import approvals_dao, bookings_dao, events_dao, registrations_dao, resources_dao
from .data_access.db import get_db, transaction
from .models.entities import DECISIONS, Approval, Event, EventRegistration

TITLE_MIN_LENGTH = 3


class WorkflowError(ValueError):
    """Base class for rule violations raised by workflow operations."""


class EventNotFound(WorkflowError):
    pass


class InvalidTransition(WorkflowError):
    pass


class ResourceUnavailable(WorkflowError):
    pass


class RegistrationClosed(WorkflowError):
    pass


class DuplicateRegistration(WorkflowError):
    pass


def submit_event(
    organizer_id: int,
    title: str,
    start_time: datetime,
    end_time: datetime,
    description: Optional[str] = None,
    location: Optional[str] = None,
    expected_attendees: Optional[int] = None,
    notes: Optional[str] = None,
    resource_ids: Iterable[int] = (),
) -> Event:
    """Create a pending event and one pending booking per selected resource."""

    title = (title or "").strip()
    if len(title) < TITLE_MIN_LENGTH:
        raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters.")
    if end_time <= start_time:
        raise ValueError("End time must be after start time.")
    if expected_attendees is not None and expected_attendees < 0:
        raise ValueError("Expected attendees cannot be negative.")

    wanted = list(dict.fromkeys(int(resource_id) for resource_id in resource_ids))
    db = get_db()
    with transaction(db):
        if wanted:
            found = {resource.id: resource for resource in resources_dao.get_resources_by_ids(wanted, connection=db)}
            unavailable = [
                found[resource_id].name if resource_id in found else f"#{resource_id}"
                for resource_id in wanted
                if resource_id not in found or not found[resource_id].available
            ]
            if unavailable:
                raise ResourceUnavailable(f"No longer available: {', '.join(unavailable)}.")

        event = events_dao.create_event(
            organizer_id,
            title,
            start_time,
            end_time,
            description=description or None,
            location=location or None,
            expected_attendees=expected_attendees,
            notes=notes or None,
            status="pending_approval",
            connection=db,
        )
        bookings_dao.create_bookings(event.id, wanted, start_time, end_time, connection=db)

    current_app.logger.info(
        "Event %s submitted by organizer %s with %d booking(s)", event.id, organizer_id, len(wanted)
    )
    return event


def decide_event(
    event_id: int,
    approver_id: int,
    decision: str,
    comments: Optional[str] = None,
) -> Approval:
    """Approve or reject a pending event.

    Flips the event status, records the approval, and on approval confirms all
    of the event's bookings.
    """

    if decision not in DECISIONS:
        raise ValueError(f"Decision must be one of {', '.join(DECISIONS)}.")

    db = get_db()
    with transaction(db):
        event = events_dao.get_event_by_id(event_id, connection=db)
        if not event:
            raise EventNotFound(f"Event {event_id} does not exist.")
        if not events_dao.transition_status(event_id, "pending_approval", decision, connection=db):
            raise InvalidTransition(
                f"Event is {event.status.replace('_', ' ')} and can no longer be {decision}."
            )
        approval = approvals_dao.create_approval(
            event_id, approver_id, decision, comments or None, connection=db
        )
        confirmed = 0
        if decision == "approved":
            confirmed = bookings_dao.confirm_bookings_for_event(event_id, connection=db)

    current_app.logger.info(
        "Event %s %s by %s (%d booking(s) confirmed)", event_id, decision, approver_id, confirmed
    )
    return approval


def register_for_event(event_id: int, student_name: str, student_email: str) -> EventRegistration:
    """Register a student for an approved event, at most once per email."""

    event = events_dao.get_event_by_id(event_id)
    if not event:
        raise EventNotFound(f"Event {event_id} does not exist.")
    if event.status != "approved":
        raise RegistrationClosed("Registration is only open for approved events.")

    existing = registrations_dao.list_registrations_for_event(event_id)
    if registrations_dao.is_registered(existing, student_email):
        raise DuplicateRegistration("You are already registered for this event.")

    try:
        registration = registrations_dao.create_registration(event_id, student_name, student_email)
    except sqlite3.IntegrityError as exc:
        raise DuplicateRegistration("You are already registered for this event.") from exc
    current_app.logger.info("%s registered for event %s", student_email, event_id)
    return registration
