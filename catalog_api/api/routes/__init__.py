# catalog_api/api/routes/__init__.py

from flask import Flask

from catalog_api.api.routes.auth_routes import bp_auth
from catalog_api.api.routes.health_routes import bp_health
from catalog_api.api.routes.product_routes import bp_prod
from catalog_api.api.routes.user_routes import bp_users


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # health stays outside the api prefix
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_users, url_prefix=f"{api_prefix}/users")
    app.register_blueprint(bp_prod, url_prefix=f"{api_prefix}/products")
