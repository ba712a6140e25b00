"""Data access helpers for the profiles and user_roles tables."""

from __future__ import annotations

from typing import Optional

import bcrypt

from ..models.entities import Profile, Role
from .db import execute, get_db, parse_timestamp, query_all, query_one, transaction

_SELECT_PROFILE = """
    SELECT p.*, ur.role
    FROM profiles p
    LEFT JOIN user_roles ur ON ur.user_id = p.id
"""


def _row_to_profile(row) -> Profile:
    return Profile(
        id=row["id"],
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        department=row["department"],
        phone=row["phone"],
        created_at=parse_timestamp(row["created_at"]),
        role=Role.parse(row["role"]),
        is_active=bool(row["is_active"]),
    )


def hash_password(password: str) -> str:
    """Return a bcrypt hash suitable for storage."""

    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_profile(
    full_name: str,
    email: str,
    password_hash: str,
    role: Role | str = Role.STUDENT,
    department: Optional[str] = None,
    phone: Optional[str] = None,
) -> Profile:
    """Insert a profile together with its role row."""

    resolved = Role.parse(role.value if isinstance(role, Role) else role)
    if resolved is None:
        raise ValueError(f"Unsupported role '{role}'")

    db = get_db()
    with transaction(db):
        cursor = execute(
            db,
            """
            INSERT INTO profiles (full_name, email, password_hash, department, phone)
            VALUES (?, ?, ?, ?, ?)
            """,
            (full_name, email, password_hash, department, phone),
        )
        profile_id = cursor.lastrowid
        execute(
            db,
            "INSERT INTO user_roles (user_id, role) VALUES (?, ?)",
            (profile_id, resolved.value),
        )
    return get_profile_by_id(profile_id, connection=db)


def get_profile_by_id(profile_id: int, connection=None) -> Profile | None:
    """Fetch a profile by primary key."""

    db = connection or get_db()
    row = query_one(db, _SELECT_PROFILE + " WHERE p.id = ?", (profile_id,))
    return _row_to_profile(row) if row else None


def get_profile_by_email(email: str) -> Profile | None:
    """Fetch a profile by unique email address."""

    db = get_db()
    row = query_one(db, _SELECT_PROFILE + " WHERE p.email = ?", (email,))
    return _row_to_profile(row) if row else None


def list_profiles() -> list[Profile]:
    """Return every profile, active or not, ordered by name."""

    db = get_db()
    rows = query_all(db, _SELECT_PROFILE + " ORDER BY p.full_name ASC")
    return [_row_to_profile(row) for row in rows]


def update_profile(profile_id: int, **fields) -> None:
    """Update the editable profile fields."""

    allowed = {"full_name", "department", "phone"}
    updates = {key: value for key, value in fields.items() if key in allowed}
    if not updates:
        return

    columns = ", ".join(f"{key} = ?" for key in updates.keys())
    params = list(updates.values()) + [profile_id]
    db = get_db()
    execute(db, f"UPDATE profiles SET {columns}, updated_at = CURRENT_TIMESTAMP WHERE id = ?", params)


def set_role(user_id: int, role: Role | str) -> None:
    """Assign a role to a user, replacing any previous one."""

    resolved = Role.parse(role.value if isinstance(role, Role) else role)
    if resolved is None:
        raise ValueError(f"Unsupported role '{role}'")

    db = get_db()
    execute(
        db,
        """
        INSERT INTO user_roles (user_id, role) VALUES (?, ?)
        ON CONFLICT (user_id) DO UPDATE SET role = excluded.role
        """,
        (user_id, resolved.value),
    )


def deactivate_profile(profile_id: int) -> None:
    """Soft delete a profile."""

    db = get_db()
    execute(db, "UPDATE profiles SET is_active = 0 WHERE id = ?", (profile_id,))


def activate_profile(profile_id: int) -> None:
    """Reactivate a previously deactivated profile."""

    db = get_db()
    execute(db, "UPDATE profiles SET is_active = 1 WHERE id = ?", (profile_id,))


def verify_password(stored_hash: str, candidate: str) -> bool:
    """Compare a stored hash against a candidate password."""

    if not stored_hash:
        return False
    return bcrypt.checkpw(candidate.encode("utf-8"), stored_hash.encode("utf-8"))
