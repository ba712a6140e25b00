"""Data access helpers for student event registrations."""

from __future__ import annotations

from ..models.entities import EventRegistration
from .db import execute, get_db, parse_timestamp, query_all, query_one


def _row_to_registration(row) -> EventRegistration:
    return EventRegistration(
        id=row["id"],
        event_id=row["event_id"],
        student_name=row["student_name"],
        student_email=row["student_email"],
        created_at=parse_timestamp(row["created_at"]),
    )


def create_registration(event_id: int, student_name: str, student_email: str) -> EventRegistration:
    """Insert a registration row."""

    db = get_db()
    cursor = execute(
        db,
        """
        INSERT INTO event_registrations (event_id, student_name, student_email)
        VALUES (?, ?, ?)
        """,
        (event_id, student_name, student_email),
    )
    row = query_one(db, "SELECT * FROM event_registrations WHERE id = ?", (cursor.lastrowid,))
    return _row_to_registration(row)


def list_registrations_for_event(event_id: int) -> list[EventRegistration]:
    """Return registrations for an event, oldest first."""

    db = get_db()
    rows = query_all(
        db,
        """
        SELECT * FROM event_registrations
        WHERE event_id = ?
        ORDER BY created_at ASC, id ASC
        """,
        (event_id,),
    )
    return [_row_to_registration(row) for row in rows]


def is_registered(registrations: list[EventRegistration], student_email: str) -> bool:
    """Membership test over already fetched registrations."""

    wanted = student_email.strip().lower()
    return any(registration.student_email.lower() == wanted for registration in registrations)
