"""Organizer and administrator dashboard."""

from __future__ import annotations

from flask import Blueprint, current_app, render_template
from flask_login import current_user

from ..data_access import events_dao
from ..models.entities import Role
from ..session import role_required

bp = Blueprint("dashboard", __name__, url_prefix="/dashboard", template_folder="../views")


@bp.route("/")
@role_required(Role.ORGANIZER, Role.ADMIN)
def index():
    """Render event stats and the most recent events in the caller's scope."""

    organizer_id = None if current_user.role.sees_all_events else current_user.id
    counts = events_dao.count_by_status(organizer_id=organizer_id)
    recent = events_dao.list_events(
        organizer_id=organizer_id,
        order_by="created_at",
        limit=current_app.config["EVENTS_PAGE_LIMIT"],
    )
    stats = {
        "total": sum(counts.values()),
        "pending": counts["pending_approval"],
        "approved": counts["approved"],
        "rejected": counts["rejected"],
    }
    return render_template("dashboard.html", stats=stats, recent_events=recent)
