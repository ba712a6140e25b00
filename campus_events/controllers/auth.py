"""Authentication blueprint handling sign up, sign in, and sign out."""

from __future__ import annotations

import sqlite3

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf import FlaskForm
from wtforms import PasswordField, SelectField, StringField, SubmitField
from wtforms.validators import Email, EqualTo, InputRequired, Length

from ..data_access import profiles_dao
from ..models.entities import Role
from ..session import home_endpoint_for

bp = Blueprint("auth", __name__, url_prefix="/auth", template_folder="../views")

SELF_SERVICE_ROLES = (Role.STUDENT, Role.ORGANIZER)


class RegistrationForm(FlaskForm):
    """Sign-up form for new campus users."""

    full_name = StringField("Full Name", validators=[InputRequired(), Length(max=120)])
    email = StringField("Email", validators=[InputRequired(), Email(), Length(max=255)])
    password = PasswordField("Password", validators=[InputRequired(), Length(min=8, max=128)])
    confirm_password = PasswordField(
        "Confirm Password",
        validators=[InputRequired(), EqualTo("password", message="Passwords must match.")],
    )
    role = SelectField(
        "Role",
        choices=[(role.value, role.label) for role in SELF_SERVICE_ROLES],
        validators=[InputRequired()],
        default=Role.STUDENT.value,
    )
    department = StringField("Department", validators=[Length(max=120)])
    submit = SubmitField("Create account")


class LoginForm(FlaskForm):
    """Basic credential form."""

    email = StringField("Email", validators=[InputRequired(), Email()])
    password = PasswordField("Password", validators=[InputRequired()])
    submit = SubmitField("Sign in")


def _safe_next(next_url: str | None) -> str | None:
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return None


@bp.route("/register", methods=["GET", "POST"])
def register():
    """Handle new user sign up."""

    if current_user.is_authenticated:
        flash("You are already signed in.", "info")
        return redirect(url_for(home_endpoint_for(current_user.role)))

    form = RegistrationForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        existing = profiles_dao.get_profile_by_email(email)
        if existing:
            form.email.errors.append("An account with that email already exists.")
        else:
            try:
                profile = profiles_dao.create_profile(
                    full_name=form.full_name.data.strip(),
                    email=email,
                    password_hash=profiles_dao.hash_password(form.password.data),
                    role=form.role.data,
                    department=form.department.data or None,
                )
            except sqlite3.Error as exc:
                current_app.logger.error("Sign up failed for %s: %s", email, exc)
                flash(str(exc), "danger")
                return render_template("auth_register.html", form=form)
            login_user(profile)
            flash("Account created! Welcome to Campus Events.", "success")
            return redirect(url_for(home_endpoint_for(profile.role)))
    return render_template("auth_register.html", form=form)


@bp.route("/login", methods=["GET", "POST"])
def login():
    """Authenticate an existing user."""

    if current_user.is_authenticated:
        flash("You are already signed in.", "info")
        return redirect(url_for(home_endpoint_for(current_user.role)))

    form = LoginForm()
    if form.validate_on_submit():
        profile = profiles_dao.get_profile_by_email(form.email.data.strip().lower())
        if not profile or not profiles_dao.verify_password(profile.password_hash, form.password.data):
            form.email.errors.append("Invalid credentials. Please try again.")
        elif not profile.is_active:
            form.email.errors.append("This account has been deactivated. Contact an administrator.")
        elif profile.role is None:
            form.email.errors.append("This account has no role assigned. Contact an administrator.")
        else:
            login_user(profile)
            flash("Welcome back! You've successfully signed in.", "success")
            next_url = _safe_next(request.args.get("next"))
            return redirect(next_url or url_for(home_endpoint_for(profile.role)))
    return render_template("auth_login.html", form=form)


@bp.route("/logout")
@login_required
def logout():
    """Sign the current user out."""

    logout_user()
    flash("You've been successfully signed out.", "info")
    return redirect(url_for("auth.login"))
