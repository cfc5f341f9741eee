# backend/pharmapos/__init__.py
from __future__ import annotations

from flask import Flask, request

from .config import Config
from .extensions import init_state
from .state import build_state


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # In-memory stores, seeded from the bundled fixtures
    state = build_state(
        seed=app.config["SEED_FIXTURES"],
        tax_rate=app.config.get("DEFAULT_TAX_RATE"),
    )
    state.confirmation_ttl_seconds = app.config["CONFIRMATION_TTL_SECONDS"]
    init_state(app, state)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.products import products_bp
    from .routes.pos import pos_bp
    from .routes.confirmations import confirmations_bp
    from .routes.reports import reports_bp
    from .routes.settings import settings_bp
    from .routes.users import users_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(pos_bp)
    app.register_blueprint(confirmations_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(users_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed_origins = {
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:4173",
            "http://127.0.0.1:4173",
        }
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,PATCH,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
