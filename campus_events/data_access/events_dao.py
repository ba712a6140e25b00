"""Data access helpers for events."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from ..models.entities import EVENT_STATUSES, Event
from .db import execute, get_db, parse_timestamp, query_all, query_one

_SELECT_EVENT = """
    SELECT e.*, p.full_name AS organizer_name, p.email AS organizer_email
    FROM events e
    LEFT JOIN profiles p ON p.id = e.organizer_id
"""


def _row_to_event(row) -> Event:
    return Event(
        id=row["id"],
        organizer_id=row["organizer_id"],
        title=row["title"],
        description=row["description"],
        location=row["location"],
        start_time=parse_timestamp(row["start_time"]),
        end_time=parse_timestamp(row["end_time"]),
        expected_attendees=row["expected_attendees"],
        notes=row["notes"],
        status=row["status"],
        created_at=parse_timestamp(row["created_at"]),
        organizer_name=row["organizer_name"],
        organizer_email=row["organizer_email"],
    )


def create_event(
    organizer_id: int,
    title: str,
    start_time: Union[str, datetime],
    end_time: Union[str, datetime],
    description: Optional[str] = None,
    location: Optional[str] = None,
    expected_attendees: Optional[int] = None,
    notes: Optional[str] = None,
    status: str = "pending_approval",
    connection=None,
) -> Event:
    """Insert a new event row."""

    if status not in EVENT_STATUSES:
        raise ValueError(f"Unsupported event status '{status}'")
    db = connection or get_db()
    start_value = start_time.isoformat() if isinstance(start_time, datetime) else start_time
    end_value = end_time.isoformat() if isinstance(end_time, datetime) else end_time
    cursor = execute(
        db,
        """
        INSERT INTO events (
            organizer_id, title, description, location, start_time, end_time,
            expected_attendees, notes, status
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            organizer_id,
            title,
            description,
            location,
            start_value,
            end_value,
            expected_attendees,
            notes,
            status,
        ),
    )
    return get_event_by_id(cursor.lastrowid, connection=db)


def get_event_by_id(event_id: int, connection=None) -> Event | None:
    """Fetch an event with its organizer's name."""

    db = connection or get_db()
    row = query_one(db, _SELECT_EVENT + " WHERE e.id = ?", (event_id,))
    return _row_to_event(row) if row else None


def transition_status(event_id: int, from_status: str, to_status: str, connection=None) -> bool:
    """Move an event between statuses only if it is currently in ``from_status``."""

    if to_status not in EVENT_STATUSES:
        raise ValueError(f"Unsupported event status '{to_status}'")
    db = connection or get_db()
    cursor = execute(
        db,
        "UPDATE events SET status = ? WHERE id = ? AND status = ?",
        (to_status, event_id, from_status),
    )
    return cursor.rowcount == 1


def list_events(
    organizer_id: Optional[int] = None,
    status: Optional[str] = None,
    starts_after: Optional[datetime] = None,
    order_by: str = "start_time",
    limit: Optional[int] = None,
) -> list[Event]:
    """Return events filtered by the provided scope."""

    db = get_db()
    query = _SELECT_EVENT + " WHERE 1 = 1"
    params: list = []
    if organizer_id is not None:
        query += " AND e.organizer_id = ?"
        params.append(organizer_id)
    if status:
        query += " AND e.status = ?"
        params.append(status)
    if starts_after is not None:
        query += " AND e.start_time > ?"
        params.append(starts_after.isoformat(timespec="seconds"))
    if order_by == "created_at":
        query += " ORDER BY e.created_at DESC, e.id DESC"
    else:
        query += " ORDER BY e.start_time ASC, e.id ASC"
    if limit:
        query += " LIMIT ?"
        params.append(limit)
    rows = query_all(db, query, params)
    return [_row_to_event(row) for row in rows]


def count_by_status(organizer_id: Optional[int] = None) -> dict[str, int]:
    """Return event counts keyed by status for the given scope."""

    db = get_db()
    query = "SELECT status, COUNT(*) AS total FROM events"
    params: list = []
    if organizer_id is not None:
        query += " WHERE organizer_id = ?"
        params.append(organizer_id)
    query += " GROUP BY status"
    counts = {status: 0 for status in EVENT_STATUSES}
    for row in query_all(db, query, params):
        counts[row["status"]] = row["total"]
    return counts
