"""Application factory for the moulding line records service."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from flask import Flask, jsonify

from .config import Config
from .employees import employees_bp
from .errors import register_error_handlers
from .extensions import db
from .machines import machines_bp
from .production_runs import production_runs_bp
from .quality_checks import quality_checks_bp
from .routes.auth import auth_bp, get_current_identity

ENDPOINT_GROUPS = {
    "machines": "/machines",
    "productionRuns": "/production-runs",
    "employees": "/employees",
    "qualityChecks": "/quality-checks",
    "auth": "/auth/google",
}


def create_app(config_object: type[Config] | None = None) -> Flask:
    """Application factory used by Flask.

    Parameters
    ----------
    config_object: type[Config] | None
        Optional configuration object to allow overriding defaults when
        creating the application.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config())
    app.config.setdefault("AVAILABLE_ENDPOINTS", ["/", "/health", *ENDPOINT_GROUPS.values()])
    app.json.sort_keys = False

    register_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    initialize_database(app)

    @app.route("/health")
    def health() -> tuple[str, int]:
        """Simple healthcheck endpoint."""
        return "OK", 200

    @app.get("/")
    def index() -> Any:
        """Describe the endpoint groups and the caller's sign-in state."""

        identity = get_current_identity()
        authentication: dict[str, Any] = (
            {"authenticated": True, "user": identity}
            if identity
            else {"authenticated": False, "message": "Visit /auth/google to authenticate"}
        )
        return jsonify(
            {
                "message": "Plastic Manufacturing API",
                "endpoints": ENDPOINT_GROUPS,
                "authentication": authentication,
            }
        )

    return app


def register_extensions(app: Flask) -> None:
    """Register Flask extensions."""
    db.init_app(app)


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(machines_bp, url_prefix="/machines")
    app.register_blueprint(production_runs_bp, url_prefix="/production-runs")
    app.register_blueprint(employees_bp, url_prefix="/employees")
    app.register_blueprint(quality_checks_bp, url_prefix="/quality-checks")
    app.register_blueprint(auth_bp, url_prefix="/auth")


def initialize_database(app: Flask) -> None:
    """Ensure the database is ready to use."""
    with app.app_context():
        Path(app.instance_path).mkdir(parents=True, exist_ok=True)
        db.create_all()
