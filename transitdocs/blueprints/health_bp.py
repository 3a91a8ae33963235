"""
Health check blueprint.

Endpoints:
    GET /api/health/ready  - simple 200 for load balancers
    GET /api/health/live   - record store status and collection sizes
"""

import logging
import time

from flask import Blueprint, current_app, jsonify

from transitdocs.store import COLLECTIONS
from transitdocs.utils.helpers import get_classifier, get_store

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api/health")


@health_bp.route("/ready", methods=["GET"])
def ready():
    """Simple readiness probe - always 200 if app is running."""
    return jsonify({"status": "ok"}), 200


@health_bp.route("/live", methods=["GET"])
def live():
    """Detailed liveness check."""
    checks = {}
    overall = True

    # ── Record store ─────────────────────────────────────────────────
    try:
        store = get_store()
        t0 = time.perf_counter()
        counts = {name: store.count(name) for name in COLLECTIONS}
        store_ms = (time.perf_counter() - t0) * 1000
        checks["record_store"] = {"status": "ok", "latency_ms": round(store_ms, 1), "counts": counts}
    except Exception as exc:
        checks["record_store"] = {"status": "error", "detail": str(exc)}
        overall = False
        logger.error("Health check - record store failed: %s", exc)

    # ── Classifier ───────────────────────────────────────────────────
    checks["classifier"] = {"status": "ok", "name": get_classifier().name}

    # ── App info ─────────────────────────────────────────────────────
    checks["app"] = {
        "name": "Transit Document Desk",
        "debug": current_app.debug,
        "testing": current_app.testing,
    }

    status_code = 200 if overall else 503
    return jsonify({
        "status": "healthy" if overall else "degraded",
        "checks": checks,
    }), status_code
