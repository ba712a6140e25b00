"""Dataclass-style entity representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from flask_login import UserMixin


class Role(str, Enum):
    """Closed set of roles a profile can hold."""

    ADMIN = "admin"
    ORGANIZER = "organizer"
    STUDENT = "student"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        if self is Role.ADMIN:
            return "Administrator"
        if self is Role.ORGANIZER:
            return "Organizer"
        if self is Role.STUDENT:
            return "Student"
        raise ValueError(f"Unhandled role {self!r}")

    @property
    def can_create_events(self) -> bool:
        return self in (Role.ADMIN, Role.ORGANIZER)

    @property
    def can_approve(self) -> bool:
        return self is Role.ADMIN

    @property
    def can_manage_resources(self) -> bool:
        return self is Role.ADMIN

    @property
    def can_register(self) -> bool:
        return self is Role.STUDENT

    @property
    def sees_all_events(self) -> bool:
        return self is Role.ADMIN


EVENT_STATUSES = ("draft", "pending_approval", "approved", "rejected", "cancelled")
DECISIONS = ("approved", "rejected")
RESOURCE_TYPES = ("room", "av_equipment", "furniture", "other")


@dataclass
class Profile(UserMixin):
    """Signed-in user compatible with Flask-Login."""

    id: int
    full_name: str
    email: str
    password_hash: str
    department: Optional[str]
    phone: Optional[str]
    created_at: datetime
    role: Optional[Role] = None
    is_active: bool = True

    def get_id(self) -> str:
        return str(self.id)


@dataclass
class Resource:
    """Bookable room or piece of equipment."""

    id: int
    name: str
    type: str
    location: Optional[str]
    capacity: Optional[int]
    available: bool
    description: Optional[str]
    created_at: datetime

    @property
    def type_label(self) -> str:
        return self.type.replace("_", " ").upper()


@dataclass
class Booking:
    """Request to reserve a resource for an event's time window."""

    id: int
    event_id: int
    resource_id: int
    start_time: datetime
    end_time: datetime
    status: str
    resource_name: Optional[str] = None
    resource_type: Optional[str] = None


@dataclass
class Event:
    """Campus event routed through the approval workflow."""

    id: int
    organizer_id: int
    title: str
    description: Optional[str]
    location: Optional[str]
    start_time: datetime
    end_time: datetime
    expected_attendees: Optional[int]
    notes: Optional[str]
    status: str
    created_at: datetime
    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
    bookings: list[Booking] = field(default_factory=list)


@dataclass
class Approval:
    """An administrator's recorded decision on a pending event."""

    id: int
    event_id: int
    approver_id: int
    status: str
    comments: Optional[str]
    created_at: datetime
    event_title: Optional[str] = None
    approver_name: Optional[str] = None


@dataclass
class EventRegistration:
    """A student's recorded intent to attend an approved event."""

    id: int
    event_id: int
    student_name: str
    student_email: str
    created_at: datetime
