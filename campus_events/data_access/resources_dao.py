"""Data access helpers for the resource catalog."""

from __future__ import annotations

from typing import Iterable, Optional

from ..models.entities import RESOURCE_TYPES, Resource
from .db import execute, get_db, parse_timestamp, query_all, query_one


def _row_to_resource(row) -> Resource:
    return Resource(
        id=row["id"],
        name=row["name"],
        type=row["type"],
        location=row["location"],
        capacity=row["capacity"],
        available=bool(row["available"]),
        description=row["description"],
        created_at=parse_timestamp(row["created_at"]),
    )


def _check_type(resource_type: str) -> None:
    if resource_type not in RESOURCE_TYPES:
        raise ValueError(f"Unsupported resource type '{resource_type}'")


def create_resource(
    name: str,
    resource_type: str,
    location: Optional[str] = None,
    capacity: Optional[int] = None,
    available: bool = True,
    description: Optional[str] = None,
) -> Resource:
    """Insert a new resource."""

    _check_type(resource_type)
    db = get_db()
    cursor = execute(
        db,
        """
        INSERT INTO resources (name, type, location, capacity, available, description)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (name, resource_type, location, capacity, int(available), description),
    )
    return get_resource_by_id(cursor.lastrowid, connection=db)


def update_resource(resource_id: int, **fields) -> None:
    """Update mutable fields for a resource."""

    allowed = {"name", "type", "location", "capacity", "available", "description"}
    updates = {key: value for key, value in fields.items() if key in allowed}
    if not updates:
        return
    if "type" in updates:
        _check_type(updates["type"])
    if "available" in updates:
        updates["available"] = int(bool(updates["available"]))

    columns = ", ".join(f"{key} = ?" for key in updates.keys())
    params = list(updates.values()) + [resource_id]
    db = get_db()
    execute(db, f"UPDATE resources SET {columns} WHERE id = ?", params)


def toggle_availability(resource_id: int) -> bool | None:
    """Flip the availability flag and return the new value."""

    resource = get_resource_by_id(resource_id)
    if not resource:
        return None
    update_resource(resource_id, available=not resource.available)
    return not resource.available


def delete_resource(resource_id: int) -> None:
    """Remove a resource. Bookings referencing it are removed by the schema."""

    db = get_db()
    execute(db, "DELETE FROM resources WHERE id = ?", (resource_id,))


def get_resource_by_id(resource_id: int, connection=None) -> Resource | None:
    """Fetch a single resource."""

    db = connection or get_db()
    row = query_one(db, "SELECT * FROM resources WHERE id = ?", (resource_id,))
    return _row_to_resource(row) if row else None


def get_resources_by_ids(resource_ids: Iterable[int], connection=None) -> list[Resource]:
    """Fetch several resources at once; missing ids are simply absent."""

    ids = list(dict.fromkeys(resource_ids))
    if not ids:
        return []
    db = connection or get_db()
    placeholders = ", ".join("?" for _ in ids)
    rows = query_all(db, f"SELECT * FROM resources WHERE id IN ({placeholders})", ids)
    return [_row_to_resource(row) for row in rows]


def list_resources(available_only: bool = False) -> list[Resource]:
    """Return the catalog ordered by name."""

    db = get_db()
    query = "SELECT * FROM resources"
    if available_only:
        query += " WHERE available = 1"
    query += " ORDER BY name ASC"
    rows = query_all(db, query)
    return [_row_to_resource(row) for row in rows]
