import logging
import os

import click
from flask import Flask, current_app, send_file, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api import api_bp
from .bootstrap import bootstrap, ensure_admin_user
from .errors import register_error_handlers
from .middleware.auth_middleware import register_jwt_callbacks
from . import models  # noqa: F401  (register models with SQLAlchemy metadata)


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY is not configured")

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)

    # -------------------------------------------------
    # API Blueprint (auth middleware attached in api/__init__.py)
    # -------------------------------------------------
    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)

    # -------------------------------------------------
    # Media (read-only static mount)
    # -------------------------------------------------
    media_prefix = app.config["MEDIA_URL_PREFIX"].rstrip("/")

    @app.route(f"{media_prefix}/<path:filename>", methods=["GET"], endpoint="media")
    def serve_media(filename):
        return send_from_directory(os.path.abspath(current_app.config["MEDIA_ROOT"]), filename)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC)
    # -------------------------------------------------
    @app.route("/openapi/showcase.yaml", methods=["GET"], endpoint="openapi_showcase")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "showcase_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("showcase_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/showcase.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Project Showcase API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    # -------------------------------------------------
    # CLI
    # -------------------------------------------------
    @app.cli.command("seed-admin")
    def seed_admin_command():
        """Create the administrator account if it does not exist."""
        user = ensure_admin_user()
        click.echo("Administrator created." if user else "Administrator already exists.")

    bootstrap(app)

    return app
