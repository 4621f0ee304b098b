"""System endpoints (health check)."""

from flask import Blueprint, jsonify

from config import settings
from config.database import mongodb

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route without authentication."""
    try:
        mongodb.client.admin.command("ping")
        db_status = "ok"
    except Exception as e:  # pragma: no cover - best effort
        db_status = f"error: {str(e)}"

    return jsonify({
        "status": "ok",
        "database": db_status,
        "statisticsUpstream": "configured" if settings.STATS_API_URL else "disabled",
    }), 200
