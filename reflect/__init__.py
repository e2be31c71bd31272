"""Reflect application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, redirect, request, url_for

from reflect.config import config_by_name
from reflect.core.auth.security import generate_csrf_token
from reflect.core.events.event_bus import event_bus
from reflect.extensions import init_extensions, jwt, login_manager


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Reflect Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
        static_folder=str(Path(__file__).parent / "static"),
        template_folder=str(Path(__file__).parent / "templates"),
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    _configure_logging(app)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = db_uri.replace("sqlite:///", "", 1)
        abs_path = Path(db_path) if Path(db_path).is_absolute() else project_root / db_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    app.extensions["event_bus"] = event_bus

    @app.get("/")
    def index():
        return redirect(url_for("dashboard_pages.dashboard"))

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    @app.get("/api/v1/ping")
    def ping():
        """Lightweight endpoint for load-balancer health checks."""
        return {"pong": True}, 200

    from reflect.scripts.dispatch_outbox import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from reflect.core.auth.controllers import auth_bp, auth_pages_bp  # local import to avoid circulars
    from reflect.domains.journal.controllers.collection_api import collection_api_bp
    from reflect.domains.journal.controllers.draft_api import draft_api_bp
    from reflect.domains.journal.controllers.journal_api import journal_api_bp
    from reflect.domains.journal.controllers.journal_pages import (
        collection_pages_bp,
        dashboard_pages_bp,
        journal_pages_bp,
    )
    from reflect.domains.journal.controllers.mood_api import mood_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(auth_pages_bp, url_prefix="/account")

    app.register_blueprint(draft_api_bp, url_prefix="/api/journal/draft")
    app.register_blueprint(journal_api_bp, url_prefix="/api/journal")
    app.register_blueprint(collection_api_bp, url_prefix="/api/collections")
    app.register_blueprint(mood_api_bp, url_prefix="/api/moods")

    app.register_blueprint(journal_pages_bp, url_prefix="/journal")
    app.register_blueprint(collection_pages_bp, url_prefix="/collection")
    app.register_blueprint(dashboard_pages_bp, url_prefix="/dashboard")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Login manager and template helpers."""
    login_manager.login_view = "auth_pages.login_page"

    @login_manager.user_loader
    def _load_user(user_id: str):
        from reflect.core.users.services import get_user

        return get_user(int(user_id)) if user_id else None

    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header, jwt_payload) -> bool:
        from reflect.core.auth.auth_service import is_token_revoked

        return is_token_revoked(jwt_payload.get("jti"))

    def _login_required(error: str, details: str):
        # Pages send the browser to the login form; API clients get JSON.
        if request.path.startswith(("/api/", "/auth/")):
            return {"ok": False, "error": error, "details": details}, 401
        return redirect(url_for(login_manager.login_view))

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _login_required("unauthorized", reason)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _login_required("token_expired", "Token has expired")

    @app.context_processor
    def inject_csrf_token():
        return {"csrf_token": generate_csrf_token}
