"""
Transit Document Desk
Flask Application Factory.

Usage:
    from transitdocs import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config

Each application owns one RecordStore (seeded at startup) plus the engines
layered on it, stored in ``app.extensions``. A missing or malformed seed
fixture raises ``SeedDataError`` out of ``create_app``.
"""

import logging
import os

from flask import Flask, abort, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from transitdocs.classifiers import create_classifier
from transitdocs.config import config
from transitdocs.core.exceptions import NotFoundError, ValidationError, WorkflowTransitionError
from transitdocs.middleware.logging_config import configure_logging
from transitdocs.middleware.rate_limiter import init_rate_limits
from transitdocs.middleware.timing import init_request_timing
from transitdocs.services.search_service import SearchEngine
from transitdocs.services.stats_service import StatsAggregator
from transitdocs.services.workflow_engine import WorkflowEngine
from transitdocs.store import RecordStore, load_seed_data
from transitdocs.utils import helpers
from transitdocs.utils.errors import E, api_error

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # no global limit, applied per blueprint
    storage_uri="memory://",
)


def _init_record_store(app):
    """Build the store, seed it and attach the engines to ``app.extensions``."""
    store = RecordStore(app.config["DATABASE_URL"])
    counts = load_seed_data(store, app.config.get("SEED_DATA_DIR"))
    app.logger.info("Record store seeded: %s", counts)

    app.extensions[helpers.STORE_KEY] = store
    app.extensions[helpers.STATS_KEY] = StatsAggregator(store)
    app.extensions[helpers.WORKFLOW_KEY] = WorkflowEngine(store)
    app.extensions[helpers.SEARCH_KEY] = SearchEngine(store)
    app.extensions[helpers.CLASSIFIER_KEY] = create_classifier(
        app.config.get("CLASSIFIER"), seed=app.config.get("CLASSIFIER_SEED"),
    )


def _register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def validation_error(e):
        return api_error(E.VALIDATION_INVALID, str(e), details=e.details)

    @app.errorhandler(NotFoundError)
    def domain_not_found(e):
        logger.info("Not found: %s", e)
        return api_error(E.NOT_FOUND, f"{e.resource} not found")

    @app.errorhandler(WorkflowTransitionError)
    def transition_error(e):
        logger.warning("Rejected workflow transition: %s", e)
        return api_error(E.CONFLICT_STATE, str(e))

    @app.errorhandler(404)
    def not_found(e):
        return api_error(E.NOT_FOUND, "Not found", details={"path": request.path})

    @app.errorhandler(405)
    def method_not_allowed(e):
        return api_error(E.METHOD_NOT_ALLOWED, "Method not allowed")

    @app.errorhandler(415)
    def unsupported_media_type(e):
        return api_error(E.UNSUPPORTED_MEDIA_TYPE, e.description or "Unsupported media type")

    @app.errorhandler(413)
    def payload_too_large(e):
        max_len = app.config.get("MAX_CONTENT_LENGTH")
        return api_error(E.PAYLOAD_TOO_LARGE, f"Request body too large (max {max_len} bytes)")

    @app.errorhandler(500)
    def server_error(e):
        logger.error("500 error: %s", e, exc_info=True)
        return api_error(E.INTERNAL, "Internal server error")


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.

    Raises:
        SeedDataError: the seed fixtures are missing or malformed.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__)
    cfg = config[config_name]
    # ProductionConfig validates the environment in __init__
    app.config.from_object(cfg() if config_name == "production" else cfg)

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Request guard (Content-Type) ─────────────────────────────────────
    @app.before_request
    def _guard_request():
        if request.method in ("POST", "PUT", "PATCH") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            # Upload accepts multipart file data
            if "multipart/form-data" in ct:
                return None
            if request.content_length and "json" not in ct:
                abort(415, description="Content-Type must be application/json")

    # ── Record store + seed data (fatal on bad fixtures) ─────────────────
    _init_record_store(app)

    # ── Blueprints ───────────────────────────────────────────────────────
    from transitdocs.blueprints.document_bp import documents_bp
    from transitdocs.blueprints.health_bp import health_bp
    from transitdocs.blueprints.qr_bp import qr_bp
    from transitdocs.blueprints.stats_bp import stats_bp
    from transitdocs.blueprints.workflow_bp import workflow_bp

    app.register_blueprint(documents_bp)
    app.register_blueprint(workflow_bp)
    app.register_blueprint(qr_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(health_bp)

    init_rate_limits(app, limiter)

    @app.route("/api/health")
    def health():
        return {"status": "ok", "app": "Transit Document Desk"}

    _register_error_handlers(app)

    return app
