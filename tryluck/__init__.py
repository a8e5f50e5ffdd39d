"""Luck Tracker application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tryluck.config import config_by_name
from tryluck.extensions import db, init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Luck Tracker Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    missing = [name for name in config_cls.REQUIRED_SETTINGS if not os.environ.get(name)]
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")

    instance_root.mkdir(parents=True, exist_ok=True)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    _configure_logging(app)
    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    @app.get("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            app.logger.error("Health check failed: %s", exc)
            db.session.rollback()
            return {"ok": False, "db": "error"}, 503
        return {"ok": True, "db": "connected"}, 200

    @app.get("/api/v1/ping")
    def ping():
        """Lightweight endpoint for load-balancer health checks."""
        return {"pong": True}, 200

    from tryluck.scripts.seed_admin import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("tryluck").setLevel(level)
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from tryluck.core.admin.controllers import admin_api_bp
    from tryluck.core.auth.controllers import auth_bp  # local import to avoid circulars
    from tryluck.domains.habits.controllers.habit_api import habit_api_bp
    from tryluck.domains.journal.controllers.journal_api import journal_api_bp
    from tryluck.domains.onboarding.controllers.onboarding_api import onboarding_api_bp
    from tryluck.domains.state.controllers.state_api import state_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(habit_api_bp, url_prefix="/api/v1/habits")
    app.register_blueprint(journal_api_bp, url_prefix="/api/v1/journals")
    app.register_blueprint(onboarding_api_bp, url_prefix="/api/v1/onboarding")
    app.register_blueprint(state_api_bp, url_prefix="/api/v1/state")
    app.register_blueprint(admin_api_bp, url_prefix="/api/v1/admin")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        db.session.rollback()
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """JWT failure responses share the API error envelope."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return jsonify({"ok": False, "error": "unauthorized"}), 401

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return jsonify({"ok": False, "error": "unauthorized"}), 401

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return jsonify({"ok": False, "error": "token_expired"}), 401
