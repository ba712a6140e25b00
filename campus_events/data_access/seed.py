"""Deterministic seed data for Campus Events."""

from __future__ import annotations

from datetime import datetime, timedelta

from .db import execute, get_db, query_one, transaction
from .profiles_dao import hash_password

SEED_PASSWORD = "Password123!"


def seed() -> None:
    """Populate the database with representative demo records."""

    db = get_db()
    password_hash = hash_password(SEED_PASSWORD)

    profiles = [
        ("Ada Admin", "ada.admin@campus.edu", "admin", "Student Affairs"),
        ("Oscar Organizer", "oscar.organizer@campus.edu", "organizer", "Computer Science Society"),
        ("Alice Student", "alice@student.edu", "student", "Computer Science"),
        ("Ben Student", "ben@student.edu", "student", "Mathematics"),
    ]

    with transaction(db):
        for full_name, email, role, department in profiles:
            execute(
                db,
                """
                INSERT OR IGNORE INTO profiles (full_name, email, password_hash, department, is_active)
                VALUES (?, ?, ?, ?, 1)
                """,
                (full_name, email, password_hash, department),
            )
            row = query_one(db, "SELECT id FROM profiles WHERE email = ?", (email,))
            execute(
                db,
                "INSERT OR IGNORE INTO user_roles (user_id, role) VALUES (?, ?)",
                (row["id"], role),
            )

        def _profile_id(email: str) -> int:
            row = query_one(db, "SELECT id FROM profiles WHERE email = ?", (email,))
            if not row:
                raise ValueError(f"Expected seed profile {email} to exist.")
            return row["id"]

        resources = [
            ("Main Auditorium", "room", "Building A", 300, 1, "Tiered seating with stage and lighting rig."),
            ("Seminar Room 2.14", "room", "Library - 2nd floor", 40, 1, "Flexible room with whiteboards."),
            ("Portable PA System", "av_equipment", "Media Center", None, 1, "Two speakers, mixer, and wireless mics."),
            ("Folding Tables (x20)", "furniture", "Facilities Store", None, 0, "Out for repair."),
        ]
        for name, resource_type, location, capacity, available, description in resources:
            if query_one(db, "SELECT 1 FROM resources WHERE name = ?", (name,)):
                continue
            execute(
                db,
                """
                INSERT INTO resources (name, type, location, capacity, available, description)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (name, resource_type, location, capacity, available, description),
            )

        organizer_id = _profile_id("oscar.organizer@campus.edu")
        base = datetime.now().replace(hour=10, minute=0, second=0, microsecond=0) + timedelta(days=14)
        events = [
            ("Welcome Week Mixer", "Meet clubs and societies.", "Main Auditorium", base, 2, 150, "approved"),
            ("Hackathon Kickoff", "Team formation and briefing.", "Seminar Room 2.14", base + timedelta(days=3), 3, 40, "pending_approval"),
            ("Late Night Rave", "Not this term.", "Main Quad", base + timedelta(days=5), 4, 500, "rejected"),
        ]
        for title, description, location, start, hours, attendees, status in events:
            if query_one(db, "SELECT 1 FROM events WHERE title = ?", (title,)):
                continue
            end = start + timedelta(hours=hours)
            cursor = execute(
                db,
                """
                INSERT INTO events (
                    organizer_id, title, description, location, start_time, end_time,
                    expected_attendees, status
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (organizer_id, title, description, location, start.isoformat(), end.isoformat(), attendees, status),
            )
            event_id = cursor.lastrowid
            booking_status = "confirmed" if status == "approved" else "pending"
            resource = query_one(db, "SELECT id FROM resources WHERE name = ?", (location,))
            if resource:
                execute(
                    db,
                    """
                    INSERT INTO bookings (event_id, resource_id, start_time, end_time, status)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (event_id, resource["id"], start.isoformat(), end.isoformat(), booking_status),
                )
            if status in ("approved", "rejected"):
                execute(
                    db,
                    "INSERT INTO approvals (event_id, approver_id, status, comments) VALUES (?, ?, ?, ?)",
                    (event_id, _profile_id("ada.admin@campus.edu"), status, None),
                )
