"""Data access helpers for resource bookings attached to events."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Union

from ..models.entities import Booking
from .db import execute, get_db, parse_timestamp, query_all


def _row_to_booking(row) -> Booking:
    row_keys = row.keys() if hasattr(row, "keys") else ()
    return Booking(
        id=row["id"],
        event_id=row["event_id"],
        resource_id=row["resource_id"],
        start_time=parse_timestamp(row["start_time"]),
        end_time=parse_timestamp(row["end_time"]),
        status=row["status"],
        resource_name=row["resource_name"] if "resource_name" in row_keys else None,
        resource_type=row["resource_type"] if "resource_type" in row_keys else None,
    )


def create_bookings(
    event_id: int,
    resource_ids: Iterable[int],
    start_time: Union[str, datetime],
    end_time: Union[str, datetime],
    connection=None,
) -> int:
    """Insert one pending booking per resource for the event window."""

    db = connection or get_db()
    start_value = start_time.isoformat() if isinstance(start_time, datetime) else start_time
    end_value = end_time.isoformat() if isinstance(end_time, datetime) else end_time
    created = 0
    for resource_id in resource_ids:
        execute(
            db,
            """
            INSERT INTO bookings (event_id, resource_id, start_time, end_time, status)
            VALUES (?, ?, ?, ?, 'pending')
            """,
            (event_id, resource_id, start_value, end_value),
        )
        created += 1
    return created


def confirm_bookings_for_event(event_id: int, connection=None) -> int:
    """Mark every booking of an event as confirmed; returns rows touched."""

    db = connection or get_db()
    cursor = execute(
        db,
        "UPDATE bookings SET status = 'confirmed' WHERE event_id = ? AND status = 'pending'",
        (event_id,),
    )
    return cursor.rowcount


def list_bookings_for_event(event_id: int, connection=None) -> list[Booking]:
    """Return bookings for an event joined with their resource."""

    db = connection or get_db()
    rows = query_all(
        db,
        """
        SELECT b.*, r.name AS resource_name, r.type AS resource_type
        FROM bookings b
        JOIN resources r ON r.id = b.resource_id
        WHERE b.event_id = ?
        ORDER BY r.name ASC
        """,
        (event_id,),
    )
    return [_row_to_booking(row) for row in rows]


def list_bookings_for_events(event_ids: Iterable[int]) -> dict[int, list[Booking]]:
    """Group bookings by event for a batch of events."""

    ids = list(event_ids)
    grouped: dict[int, list[Booking]] = {event_id: [] for event_id in ids}
    if not ids:
        return grouped
    db = get_db()
    placeholders = ", ".join("?" for _ in ids)
    rows = query_all(
        db,
        f"""
        SELECT b.*, r.name AS resource_name, r.type AS resource_type
        FROM bookings b
        JOIN resources r ON r.id = b.resource_id
        WHERE b.event_id IN ({placeholders})
        ORDER BY r.name ASC
        """,
        ids,
    )
    for row in rows:
        booking = _row_to_booking(row)
        grouped.setdefault(booking.event_id, []).append(booking)
    return grouped
