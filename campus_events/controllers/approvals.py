"""Administrator approval queue."""

from __future__ import annotations

import sqlite3

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user

from ..data_access import approvals_dao, bookings_dao, events_dao
from ..models.entities import DECISIONS, Role
from ..session import role_required
from ..workflow import WorkflowError, decide_event

bp = Blueprint("approvals", __name__, url_prefix="/approvals", template_folder="../views")


@bp.route("/")
@role_required(Role.ADMIN)
def pending():
    """List events awaiting a decision, newest first."""

    events = events_dao.list_events(status="pending_approval", order_by="created_at")
    bookings = bookings_dao.list_bookings_for_events(event.id for event in events)
    for event in events:
        event.bookings = bookings.get(event.id, [])
    history = approvals_dao.list_recent_approvals(limit=10)
    return render_template("approvals.html", events=events, history=history)


@bp.route("/<int:event_id>/<decision>", methods=["POST"])
@role_required(Role.ADMIN)
def decide(event_id: int, decision: str):
    """Approve or reject a pending event."""

    if decision not in DECISIONS:
        flash("Unknown decision.", "danger")
        return redirect(url_for("approvals.pending"))

    comments = (request.form.get("comments") or "").strip() or None
    try:
        decide_event(event_id, current_user.id, decision, comments)
    except WorkflowError as exc:
        current_app.logger.warning("Decision on event %s rejected: %s", event_id, exc)
        flash(str(exc), "warning")
    except sqlite3.Error as exc:
        current_app.logger.error("Decision on event %s failed: %s", event_id, exc)
        flash(str(exc), "danger")
    else:
        flash(f"Event {decision}.", "success")
    return redirect(url_for("approvals.pending"))
