"""Session and role resolution shared by every page.

``SessionProvider`` is the single owner of "who is signed in and what may
they do": it wires Flask-Login, exposes the current ``Role`` to views and
templates, and fans sign-in/sign-out notifications out to subscribers.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict, NamedTuple

from flask import Flask, abort, current_app, g
from flask_login import LoginManager, current_user, user_logged_in, user_logged_out

from .data_access import profiles_dao
from .models.entities import Profile, Role

SIGNED_IN = "signed_in"
SIGNED_OUT = "signed_out"

Subscriber = Callable[[str, Profile], None]


class NavItem(NamedTuple):
    endpoint: str
    label: str


def navigation_for(role: Role) -> list[NavItem]:
    """Navigation entries visible to a role."""

    if role is Role.ADMIN:
        return [
            NavItem("dashboard.index", "Dashboard"),
            NavItem("events.list_events", "Events"),
            NavItem("events.new_event", "New Event"),
            NavItem("resources.list_resources", "Resources"),
            NavItem("approvals.pending", "Approvals"),
            NavItem("settings.index", "Settings"),
        ]
    if role is Role.ORGANIZER:
        return [
            NavItem("dashboard.index", "Dashboard"),
            NavItem("events.list_events", "Events"),
            NavItem("events.new_event", "New Event"),
            NavItem("resources.list_resources", "Resources"),
            NavItem("settings.index", "Settings"),
        ]
    if role is Role.STUDENT:
        return [
            NavItem("events.list_events", "Events"),
            NavItem("resources.list_resources", "Resources"),
            NavItem("settings.index", "Settings"),
        ]
    raise ValueError(f"Unhandled role {role!r}")


def home_endpoint_for(role: Role | None) -> str:
    """Where a user lands after signing in."""

    if role is None or role is Role.STUDENT:
        return "events.list_events"
    if role in (Role.ADMIN, Role.ORGANIZER):
        return "dashboard.index"
    raise ValueError(f"Unhandled role {role!r}")


class SessionProvider:
    """Central session/role resolver with a subscribe/notify contract."""

    def __init__(self, app: Flask | None = None) -> None:
        self.login_manager = LoginManager()
        self.login_manager.login_view = "auth.login"
        self.login_manager.login_message_category = "info"
        self.login_manager.user_loader(self._load_user)
        self._subscribers: list[Subscriber] = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        self.login_manager.init_app(app)
        user_logged_in.connect(self._on_logged_in, app)
        user_logged_out.connect(self._on_logged_out, app)
        app.context_processor(self._inject_session)
        app.extensions["session_provider"] = self

    def teardown(self, app: Flask) -> None:
        """Disconnect from the app's Flask-Login signals and drop every subscriber."""

        user_logged_in.disconnect(self._on_logged_in, app)
        user_logged_out.disconnect(self._on_logged_out, app)
        if app.extensions.get("session_provider") is self:
            del app.extensions["session_provider"]
        self._subscribers.clear()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for session changes; returns an unsubscribe hook."""

        if callback not in self._subscribers:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def notify(self, event: str, profile: Profile) -> None:
        for callback in list(self._subscribers):
            callback(event, profile)

    @staticmethod
    def current_role() -> Role | None:
        if not current_user.is_authenticated:
            return None
        return current_user.role

    @staticmethod
    def _load_user(user_id: str) -> Profile | None:
        if not user_id:
            return None
        profile = profiles_dao.get_profile_by_id(int(user_id))
        if profile is None or profile.role is None:
            return None
        return profile

    def _on_logged_in(self, sender: Any, user: Profile, **extra: Any) -> None:
        self.notify(SIGNED_IN, user)

    def _on_logged_out(self, sender: Any, user: Profile, **extra: Any) -> None:
        self.notify(SIGNED_OUT, user)

    def _inject_session(self) -> Dict[str, Any]:
        role = self.current_role()
        return {
            "role": role,
            "navigation": navigation_for(role) if role else [],
        }


def role_required(*roles: Role) -> Callable:
    """Decorator restricting a view to the given roles."""

    allowed = frozenset(roles)

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                return current_app.login_manager.unauthorized()
            if allowed and current_user.role not in allowed:
                current_app.logger.warning(
                    "User %s (%s) denied access to %s", current_user.id, current_user.role, view.__name__
                )
                g.required_roles = sorted(role.value for role in allowed)
                abort(403)
            return view(*args, **kwargs)

        return wrapped

    return decorator
