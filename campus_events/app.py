"""Application factory for Campus Events."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from flask import Flask, current_app, g, redirect, render_template, url_for
from flask_login import current_user
from flask_wtf import CSRFProtect
from flask_wtf.csrf import generate_csrf

from .config import BaseConfig, get_config
from .data_access.db import init_app as init_db_app
from .models.entities import Profile
from .session import SIGNED_IN, SessionProvider, home_endpoint_for

csrf = CSRFProtect()
session_provider = SessionProvider()


def create_app(config_object: type[BaseConfig] | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "views"),
        static_folder=str(Path(__file__).parent / "static"),
    )

    config_cls = config_object or get_config()
    app.config.from_object(config_cls)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    csrf.init_app(app)
    session_provider.init_app(app)
    init_db_app(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_session_logging(app)

    @app.route("/")
    def index():
        """Send signed-in users home; everyone else sees the landing page."""

        if current_user.is_authenticated:
            return redirect(url_for(home_endpoint_for(current_user.role)))
        return render_template("landing.html")

    @app.context_processor
    def inject_globals() -> Dict[str, Any]:
        """Expose common template variables."""

        return {
            "current_user": current_user,
            "current_year": datetime.now(timezone.utc).year,
            "csrf_token": generate_csrf,
        }

    return app


def register_blueprints(app: Flask) -> None:
    """Import and register application blueprints."""

    from .controllers import (  # pylint: disable=import-outside-toplevel
        approvals,
        auth,
        dashboard,
        events,
        resources,
        settings,
    )

    app.register_blueprint(auth.bp)
    app.register_blueprint(dashboard.bp)
    app.register_blueprint(events.bp)
    app.register_blueprint(approvals.bp)
    app.register_blueprint(resources.bp)
    app.register_blueprint(settings.bp)


def log_session_change(event: str, profile: Profile) -> None:
    """Session subscriber writing sign-in/sign-out to the app log."""

    verb = "signed in" if event == SIGNED_IN else "signed out"
    role = profile.role.value if profile.role else "no role"
    current_app.logger.info("%s (%s) %s", profile.email, role, verb)


def register_session_logging(app: Flask) -> None:
    """Log sign-in and sign-out through the session provider."""

    session_provider.subscribe(log_session_change)


def register_error_handlers(app: Flask) -> None:
    """Register user-friendly error handlers."""

    @app.errorhandler(403)
    def forbidden(error: Exception) -> tuple[str, int]:
        required = g.get("required_roles")
        message = "You don't have permission to access this page."
        if required:
            message += f" This page requires the {' or '.join(required)} role."
        return (
            render_template("error.html", title="Access Denied", message=message),
            403,
        )

    @app.errorhandler(404)
    def not_found(error: Exception) -> tuple[str, int]:
        return (
            render_template(
                "error.html",
                title="Page Not Found",
                message="We could not locate the page you requested.",
            ),
            404,
        )

    @app.errorhandler(500)
    def server_error(error: Exception) -> tuple[str, int]:
        return (
            render_template(
                "error.html",
                title="Server Error",
                message="An unexpected error occurred. Please try again.",
            ),
            500,
        )
