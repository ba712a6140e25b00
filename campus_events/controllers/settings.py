"""Profile settings and administrator user management."""

from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import InputRequired, Length

from ..data_access import profiles_dao
from ..models.entities import Role
from ..session import role_required

bp = Blueprint("settings", __name__, url_prefix="/settings", template_folder="../views")


class ProfileForm(FlaskForm):
    """Editable profile details."""

    full_name = StringField("Full Name", validators=[InputRequired(), Length(max=120)])
    department = StringField("Department", validators=[Length(max=120)])
    phone = StringField("Phone", validators=[Length(max=40)])
    submit = SubmitField("Save changes")


@bp.route("/", methods=["GET", "POST"])
@login_required
def index():
    """Edit the signed-in user's profile; admins also see the user directory."""

    form = ProfileForm(obj=current_user)
    if form.validate_on_submit():
        profiles_dao.update_profile(
            current_user.id,
            full_name=form.full_name.data.strip(),
            department=form.department.data or None,
            phone=form.phone.data or None,
        )
        flash("Profile updated.", "success")
        return redirect(url_for("settings.index"))

    users = profiles_dao.list_profiles() if current_user.role is Role.ADMIN else []
    return render_template("settings.html", form=form, users=users, roles=list(Role))


@bp.route("/users/<int:user_id>/role", methods=["POST"])
@role_required(Role.ADMIN)
def change_role(user_id: int):
    """Assign a new role to a user."""

    role = Role.parse(request.form.get("role"))
    if role is None:
        flash("Unknown role.", "danger")
    elif user_id == current_user.id:
        flash("You cannot change your own role.", "warning")
    else:
        profiles_dao.set_role(user_id, role)
        current_app.logger.info("User %s role set to %s by %s", user_id, role.value, current_user.id)
        flash(f"Role updated to {role.label}.", "success")
    return redirect(url_for("settings.index"))


@bp.route("/users/<int:user_id>/deactivate", methods=["POST"])
@role_required(Role.ADMIN)
def deactivate_user(user_id: int):
    """Deactivate a user account."""

    if user_id == current_user.id:
        flash("You cannot deactivate your own account.", "warning")
    else:
        profiles_dao.deactivate_profile(user_id)
        flash("User deactivated.", "info")
    return redirect(url_for("settings.index"))


@bp.route("/users/<int:user_id>/activate", methods=["POST"])
@role_required(Role.ADMIN)
def activate_user(user_id: int):
    """Reactivate a user account."""

    profiles_dao.activate_profile(user_id)
    flash("User reactivated.", "success")
    return redirect(url_for("settings.index"))
