"""Health check blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify

from database.connection import get_db_pool
from utils.performance import monitor


health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
def health_check():
    db_pool = get_db_pool()
    data = {
        "status": "ok" if db_pool.initialized else "degraded",
        "db_pool_size": db_pool.pool_size,
        "db_pool_idle": db_pool.idle_count,
        "host": monitor.gather_host_metrics(),
    }
    return jsonify(data)
