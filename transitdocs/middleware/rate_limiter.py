"""
Rate limiting configuration.

Applies per-blueprint limits using Flask-Limiter. The Limiter instance is
created in transitdocs/__init__.py with no default limits; this module
applies limits per route category.

Usage:
    from transitdocs.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)

# Blueprints whose routes mutate records
WRITE_BLUEPRINTS = ("workflow", "qr_codes")


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Document POSTs:   UPLOAD_RATE_LIMIT (classification is the costly path)
        - Write blueprints: WRITE_RATE_LIMIT
        - Health check:     exempt

    Rate limiting is disabled in testing mode.
    """

    if app.config.get("TESTING") or not app.config.get("RATELIMIT_ENABLED", True):
        app.logger.info("Rate limiter disabled")
        return

    upload_limit = app.config.get("UPLOAD_RATE_LIMIT", "30/minute")
    write_limit = app.config.get("WRITE_RATE_LIMIT", "120/minute")

    # Document POSTs (create + upload) only; listing and search stay unlimited.
    bp = app.blueprints.get("documents")
    if bp:
        limiter.limit(upload_limit, methods=["POST"])(bp)

    for bp_name in WRITE_BLUEPRINTS:
        bp = app.blueprints.get(bp_name)
        if bp:
            limiter.limit(write_limit)(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info("Rate limiter configured - upload: %s, write: %s", upload_limit, write_limit)
