from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from showcase.extensions import db
from . import api_bp


@api_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness plus one round trip to the database."""
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.warning("health.database_unreachable error=%s", exc)
        database = "unreachable"

    status_code = 200 if database == "ok" else 503
    return jsonify({
        "status": "ok" if status_code == 200 else "degraded",
        "service": "showcase-api",
        "database": database
    }), status_code
