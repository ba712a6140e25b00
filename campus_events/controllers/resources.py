"""Resource catalog routes."""

from __future__ import annotations

import sqlite3
from types import SimpleNamespace

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for
from flask_login import login_required
from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import InputRequired, Length, NumberRange, Optional

from ..data_access import resources_dao
from ..filters import filter_resources
from ..models.entities import RESOURCE_TYPES, Role
from ..session import role_required

bp = Blueprint("resources", __name__, url_prefix="/resources", template_folder="../views")

TYPE_CHOICES = [(value, value.replace("_", " ").title().replace("Av ", "AV ")) for value in RESOURCE_TYPES]


class ResourceForm(FlaskForm):
    """Form for creating and editing resources."""

    name = StringField("Name", validators=[InputRequired(), Length(max=150)])
    type = SelectField("Type", choices=TYPE_CHOICES, validators=[InputRequired()])
    location = StringField("Location", validators=[Length(max=150)])
    capacity = IntegerField("Capacity", validators=[Optional(), NumberRange(min=0, max=10000)])
    description = TextAreaField("Description", validators=[Length(max=2000)])
    available = BooleanField("Available for booking", default=True)
    submit = SubmitField("Save resource")


@bp.route("/")
@login_required
def list_resources():
    """Browse the catalog with search and type filters."""

    raw_search = (request.args.get("q") or "").strip()
    raw_type = (request.args.get("type") or "all").strip() or "all"
    if raw_type != "all" and raw_type not in RESOURCE_TYPES:
        raw_type = "all"
    resources = filter_resources(resources_dao.list_resources(), search=raw_search, resource_type=raw_type)
    return render_template(
        "resources_list.html",
        resources=resources,
        type_choices=TYPE_CHOICES,
        search_context=SimpleNamespace(q=raw_search, type=raw_type),
    )


@bp.route("/new", methods=["GET", "POST"])
@role_required(Role.ADMIN)
def create_resource():
    """Add a resource to the catalog."""

    form = ResourceForm()
    if form.validate_on_submit():
        try:
            resource = resources_dao.create_resource(
                name=form.name.data.strip(),
                resource_type=form.type.data,
                location=form.location.data or None,
                capacity=form.capacity.data,
                available=form.available.data,
                description=form.description.data or None,
            )
        except sqlite3.Error as exc:
            current_app.logger.error("Resource creation failed: %s", exc)
            flash(str(exc), "danger")
        else:
            current_app.logger.info("Resource %s created", resource.id)
            flash("Resource created successfully.", "success")
            return redirect(url_for("resources.list_resources"))
    return render_template("resources_form.html", form=form)


@bp.route("/<int:resource_id>/edit", methods=["GET", "POST"])
@role_required(Role.ADMIN)
def edit(resource_id: int):
    """Edit an existing resource."""

    resource = resources_dao.get_resource_by_id(resource_id)
    if not resource:
        abort(404)

    form = ResourceForm(obj=resource)
    if form.validate_on_submit():
        try:
            resources_dao.update_resource(
                resource_id,
                name=form.name.data.strip(),
                type=form.type.data,
                location=form.location.data or None,
                capacity=form.capacity.data,
                available=form.available.data,
                description=form.description.data or None,
            )
        except sqlite3.Error as exc:
            current_app.logger.error("Resource %s update failed: %s", resource_id, exc)
            flash(str(exc), "danger")
        else:
            current_app.logger.info("Resource %s updated", resource_id)
            flash("Resource updated.", "success")
            return redirect(url_for("resources.list_resources"))
    return render_template("resources_form.html", form=form, resource=resource)


@bp.route("/<int:resource_id>/toggle", methods=["POST"])
@role_required(Role.ADMIN)
def toggle(resource_id: int):
    """Flip a resource between available and unavailable."""

    available = resources_dao.toggle_availability(resource_id)
    if available is None:
        abort(404)
    current_app.logger.info("Resource %s availability set to %s", resource_id, available)
    flash("Resource is now available." if available else "Resource marked unavailable.", "info")
    return redirect(url_for("resources.list_resources"))


@bp.route("/<int:resource_id>/delete", methods=["POST"])
@role_required(Role.ADMIN)
def delete(resource_id: int):
    """Remove a resource from the catalog."""

    if not resources_dao.get_resource_by_id(resource_id):
        abort(404)
    try:
        resources_dao.delete_resource(resource_id)
    except sqlite3.Error as exc:
        current_app.logger.error("Resource %s delete failed: %s", resource_id, exc)
        flash(str(exc), "danger")
    else:
        current_app.logger.info("Resource %s deleted", resource_id)
        flash("Resource deleted.", "info")
    return redirect(url_for("resources.list_resources"))
