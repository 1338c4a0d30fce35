# rentalhub/__init__.py
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .cli import register_cli
from .errors import register_error_handlers
from .extensions import init_extensions
from .security.auth import attach_refreshed_tokens


def _get_allowed_origins(app: Flask) -> list[str]:
    """Allowed CORS origins from config; local dev servers always included."""
    default = [
        "http://localhost:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:5174",
    ]
    extra = app.config.get("CORS_ALLOWED_ORIGINS") or ""
    extra_list = [o.strip() for o in extra.split(",") if o.strip()]
    return sorted(set(default + extra_list))


def _configure_logging(app: Flask) -> None:
    """JSON logs to stdout."""
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    app.logger.setLevel(level)
    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers in reloaders
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)


def _configure_cors(app: Flask) -> None:
    CORS(
        app,
        resources={r"/api/*": {"origins": _get_allowed_origins(app)}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Refresh-Token"],
        expose_headers=["Content-Type", app.config["ACCESS_TOKEN_HEADER"]],
        max_age=86400,
    )


def _configure_proxy(app: Flask) -> None:
    """Respect X-Forwarded-* from the reverse proxy."""
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore


def _load_config(app: Flask, config_object: Optional[str | Any]) -> None:
    if config_object is None:
        config_object = os.getenv("CONFIG_CLASS", "rentalhub.config.Config")
    app.config.from_object(config_object)
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(app.instance_path, "rentalhub.db")


def _register_blueprints(app: Flask) -> None:
    from .routes import admin, admin_auth, landlord_auth, properties, tenant_auth, tenants

    for module in (landlord_auth, tenant_auth, admin_auth, admin, tenants, properties):
        app.register_blueprint(module.bp)
        app.logger.debug("Registered blueprint %s at %s", module.bp.name, module.bp.url_prefix)


# --- Application Factory ------------------------------------------------------
def create_app(config_object: Optional[str | Any] = None) -> Flask:
    """
    Standard Flask application factory.

    `config_object` may be:
      - a config object
      - dotted path to a config class (e.g., "rentalhub.config.TestingConfig")
      - None (then we'll try CONFIG_CLASS env or default to rentalhub.config.Config)
    """
    app = Flask(__name__, instance_relative_config=True)
    # Instance folder holds the default sqlite database
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass

    _load_config(app, config_object)

    # Core middleware/logging/CORS
    _configure_logging(app)
    _configure_proxy(app)
    _configure_cors(app)

    init_extensions(app)
    _register_blueprints(app)
    register_error_handlers(app)
    register_cli(app)

    app.after_request(attach_refreshed_tokens)

    @app.get("/api/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "time": datetime.now(timezone.utc).isoformat(),
                "service": "rentalhub-backend",
            }
        ), 200

    return app
