"""Event listing, submission, detail, and registration routes."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from types import SimpleNamespace

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from flask_wtf import FlaskForm
from wtforms import (
    DateField,
    IntegerField,
    SelectMultipleField,
    StringField,
    SubmitField,
    TextAreaField,
    TimeField,
)
from wtforms.validators import InputRequired, Length, NumberRange, Optional, ValidationError
from wtforms.widgets import CheckboxInput, ListWidget

from ..data_access import approvals_dao, bookings_dao, events_dao, registrations_dao, resources_dao
from ..filters import filter_events
from ..models.entities import EVENT_STATUSES, Role
from ..session import role_required
from ..workflow import TITLE_MIN_LENGTH, WorkflowError, register_for_event, submit_event

bp = Blueprint("events", __name__, url_prefix="/events", template_folder="../views")


class ResourceChecklistField(SelectMultipleField):
    """Multi-select rendered as a list of checkboxes."""

    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class EventForm(FlaskForm):
    """Form for submitting a new event for approval."""

    title = StringField(
        "Event Title",
        validators=[
            InputRequired(),
            Length(min=TITLE_MIN_LENGTH, max=200, message="Title must be at least 3 characters."),
        ],
    )
    description = TextAreaField("Description", validators=[Length(max=4000)])
    location = StringField("Location", validators=[Length(max=200)])
    start_date = DateField("Start Date", validators=[InputRequired(message="Please pick a start date.")])
    start_time = TimeField("Start Time", validators=[InputRequired(message="Please provide a start time.")])
    end_date = DateField("End Date", validators=[InputRequired(message="Please pick an end date.")])
    end_time = TimeField("End Time", validators=[InputRequired(message="Please provide an end time.")])
    expected_attendees = IntegerField(
        "Expected Attendees",
        validators=[Optional(), NumberRange(min=0, message="Attendees cannot be negative.")],
    )
    notes = TextAreaField("Notes", validators=[Length(max=2000)])
    resource_ids = ResourceChecklistField("Resources", coerce=int, validators=[Optional()])
    submit = SubmitField("Create Event")

    @property
    def starts_at(self) -> datetime | None:
        if self.start_date.data and self.start_time.data:
            return datetime.combine(self.start_date.data, self.start_time.data)
        return None

    @property
    def ends_at(self) -> datetime | None:
        if self.end_date.data and self.end_time.data:
            return datetime.combine(self.end_date.data, self.end_time.data)
        return None

    def validate_end_time(self, field) -> None:
        start, end = self.starts_at, self.ends_at
        if start and end and end <= start:
            raise ValidationError("End must be after start.")


def _scoped_events(role: Role):
    """Events visible to the current user's role."""

    if role is Role.STUDENT:
        return events_dao.list_events(status="approved", starts_after=datetime.now())
    if role is Role.ORGANIZER:
        return events_dao.list_events(organizer_id=current_user.id)
    if role is Role.ADMIN:
        return events_dao.list_events()
    raise ValueError(f"Unhandled role {role!r}")


@bp.route("/")
@login_required
def list_events():
    """Role-scoped event listing with search and status filters."""

    raw_search = (request.args.get("q") or "").strip()
    raw_status = (request.args.get("status") or "all").strip() or "all"
    if raw_status != "all" and raw_status not in EVENT_STATUSES:
        raw_status = "all"

    role = current_user.role
    try:
        events = _scoped_events(role)
    except sqlite3.Error as exc:
        current_app.logger.error("Failed to fetch events: %s", exc)
        flash(str(exc), "danger")
        events = []
    filtered = filter_events(events, search=raw_search, status=raw_status)
    return render_template(
        "events_list.html",
        events=filtered,
        statuses=EVENT_STATUSES,
        search_context=SimpleNamespace(q=raw_search, status=raw_status),
        student_view=role is Role.STUDENT,
    )


@bp.route("/new", methods=["GET", "POST"])
@role_required(Role.ORGANIZER, Role.ADMIN)
def new_event():
    """Submit a new event with optional resource bookings."""

    form = EventForm()
    available = resources_dao.list_resources(available_only=True)
    form.resource_ids.choices = [(resource.id, resource.name) for resource in available]

    if form.validate_on_submit():
        try:
            event = submit_event(
                organizer_id=current_user.id,
                title=form.title.data,
                start_time=form.starts_at,
                end_time=form.ends_at,
                description=form.description.data,
                location=form.location.data,
                expected_attendees=form.expected_attendees.data,
                notes=form.notes.data,
                resource_ids=form.resource_ids.data or [],
            )
        except WorkflowError as exc:
            current_app.logger.warning("Event submission rejected: %s", exc)
            flash(str(exc), "warning")
        except ValueError as exc:
            flash(str(exc), "danger")
        except sqlite3.Error as exc:
            current_app.logger.error("Event submission failed: %s", exc)
            flash(str(exc), "danger")
        else:
            flash(f'Event "{event.title}" created and submitted for approval.', "success")
            return redirect(url_for("events.list_events"))
    return render_template("events_form.html", form=form, resources=available)


@bp.route("/<int:event_id>")
@login_required
def detail(event_id: int):
    """Show an event; its organizer and admins also see bookings, registrations, and decisions."""

    event = events_dao.get_event_by_id(event_id)
    if not event:
        abort(404)
    role = current_user.role
    if role is Role.STUDENT and event.status != "approved":
        abort(404)
    if role is Role.ORGANIZER and event.organizer_id != current_user.id and event.status != "approved":
        abort(403)

    manages = role is Role.ADMIN or event.organizer_id == current_user.id
    event.bookings = bookings_dao.list_bookings_for_event(event_id)
    registrations = registrations_dao.list_registrations_for_event(event_id)
    is_registered = registrations_dao.is_registered(registrations, current_user.email)
    return render_template(
        "event_detail.html",
        event=event,
        registrations=registrations,
        is_registered=is_registered,
        can_register=role.can_register and event.status == "approved",
        show_registrations=manages,
        approvals=approvals_dao.list_approvals_for_event(event_id) if manages else [],
    )


@bp.route("/<int:event_id>/register", methods=["POST"])
@role_required(Role.STUDENT)
def register(event_id: int):
    """Register the signed-in student for an approved event."""

    try:
        register_for_event(event_id, current_user.full_name, current_user.email)
    except WorkflowError as exc:
        current_app.logger.warning("Registration for event %s rejected: %s", event_id, exc)
        flash(str(exc), "warning")
    except sqlite3.Error as exc:
        current_app.logger.error("Registration for event %s failed: %s", event_id, exc)
        flash(str(exc), "danger")
    else:
        flash("Registration successful! You're on the list.", "success")
    return redirect(url_for("events.detail", event_id=event_id))
