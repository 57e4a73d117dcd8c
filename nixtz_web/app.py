"""Application factory for the Nixtz staff roster API."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from flask import Flask, jsonify
from flask.typing import ResponseReturnValue

from .dao import db as db_module
from .blueprints.leave.routes import bp as leave_bp
from .blueprints.roster.routes import bp as roster_bp
from .blueprints.shifts.routes import bp as shifts_bp
from .blueprints.staff.routes import bp as staff_bp


DEFAULT_CONFIG: dict[str, Any] = {
    "SECRET_KEY": "dev",
    "JSON_SORT_KEYS": False,
    "DEFAULT_ORG": "default",
    # Path to a JSON/YAML file (or a mapping) overriding engine shifts/policy.
    "ROSTER_CONFIG": None,
    "SEED_DATA": True,
}


def create_app(config: dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("NIXTZ")

    if config:
        app.config.update(config)

    database_path = app.config.get(
        "DATABASE",
        Path(app.instance_path) / "nixtz_roster.sqlite",
    )
    if isinstance(database_path, Path):
        database_path = str(database_path)
    app.config["DATABASE"] = database_path

    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    db_module.init_app(app)
    db_module.ensure_schema(app)

    app.register_blueprint(staff_bp)
    app.register_blueprint(roster_bp)
    app.register_blueprint(shifts_bp)
    app.register_blueprint(leave_bp)

    @app.get("/")
    def index() -> ResponseReturnValue:
        return jsonify(
            {
                "service": "nixtz-roster",
                "endpoints": sorted(
                    rule.rule for rule in app.url_map.iter_rules() if rule.rule.startswith("/api/")
                ),
            }
        )

    @app.get("/healthz")
    def healthcheck() -> tuple[str, int]:
        return "OK", 200

    return app
