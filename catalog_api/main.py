# catalog_api/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from catalog_api.api.middlewares.error_handler import register_error_handlers
from catalog_api.api.routes import register_routes
from catalog_api.config.flask_config import configure_app
from catalog_api.config.settings import settings
from catalog_api.infrastructure.database.session import create_schema, init_engine

import catalog_api.infrastructure.database.models  # noqa: F401

API_PREFIX = settings.api_prefix.rstrip("/")


def create_app() -> Flask:
    app = Flask(__name__)

    CORS(
        app,
        resources={rf"{API_PREFIX}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)

    init_engine(settings.database_url, echo=False)
    if settings.auto_create_schema:
        create_schema()

    register_routes(app, api_prefix=API_PREFIX)
    register_error_handlers(app)

    app.logger.info("catalog-api started env=%s prefix=%s", settings.environment, API_PREFIX)
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=settings.debug)
