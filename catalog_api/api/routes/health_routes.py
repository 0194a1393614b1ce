from flask import Blueprint, jsonify
from sqlalchemy import text

from catalog_api.infrastructure.database.session import db_session

bp_health = Blueprint("health", __name__, url_prefix="/health")


@bp_health.get("")
def health():
    return jsonify({"status": "UP", "service": "catalog-api"}), 200


@bp_health.get("/live")
def live():
    return jsonify({"status": "ALIVE"}), 200


@bp_health.get("/ready")
def ready():
    with db_session() as session:
        session.execute(text("select 1"))
    return jsonify({"status": "READY", "database": "ok"}), 200
