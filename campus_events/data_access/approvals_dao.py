"""Data access helpers for approval decisions."""

from __future__ import annotations

from typing import Optional

from ..models.entities import DECISIONS, Approval
from .db import execute, get_db, parse_timestamp, query_all, query_one


def _row_to_approval(row) -> Approval:
    row_keys = row.keys() if hasattr(row, "keys") else ()
    return Approval(
        id=row["id"],
        event_id=row["event_id"],
        approver_id=row["approver_id"],
        status=row["status"],
        comments=row["comments"],
        created_at=parse_timestamp(row["created_at"]),
        event_title=row["event_title"] if "event_title" in row_keys else None,
        approver_name=row["approver_name"] if "approver_name" in row_keys else None,
    )


def create_approval(
    event_id: int,
    approver_id: int,
    status: str,
    comments: Optional[str] = None,
    connection=None,
) -> Approval:
    """Record an approval decision."""

    if status not in DECISIONS:
        raise ValueError(f"Unsupported decision '{status}'")
    db = connection or get_db()
    cursor = execute(
        db,
        """
        INSERT INTO approvals (event_id, approver_id, status, comments)
        VALUES (?, ?, ?, ?)
        """,
        (event_id, approver_id, status, comments),
    )
    row = query_one(db, "SELECT * FROM approvals WHERE id = ?", (cursor.lastrowid,))
    return _row_to_approval(row)


def list_approvals_for_event(event_id: int) -> list[Approval]:
    """Return decisions recorded for a single event."""

    db = get_db()
    rows = query_all(
        db,
        """
        SELECT a.*, p.full_name AS approver_name
        FROM approvals a
        LEFT JOIN profiles p ON p.id = a.approver_id
        WHERE a.event_id = ?
        ORDER BY a.created_at DESC, a.id DESC
        """,
        (event_id,),
    )
    return [_row_to_approval(row) for row in rows]


def list_recent_approvals(limit: int = 10) -> list[Approval]:
    """Most recent decisions across all events."""

    db = get_db()
    rows = query_all(
        db,
        """
        SELECT a.*, e.title AS event_title, p.full_name AS approver_name
        FROM approvals a
        JOIN events e ON e.id = a.event_id
        LEFT JOIN profiles p ON p.id = a.approver_id
        ORDER BY a.created_at DESC, a.id DESC
        LIMIT ?
        """,
        (limit,),
    )
    return [_row_to_approval(row) for row in rows]
