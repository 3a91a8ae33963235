"""
Transit Document Desk
Configuration classes for Flask App Factory.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name])
"""

import os
import secrets

# Generate a random key for development; production MUST use a stable env var
_DEV_SECRET = secrets.token_hex(32)


class Config:
    """Base configuration shared across all environments."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    DEBUG = False
    TESTING = False

    # Record store - in-memory SQLite unless overridden (data is never persisted)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

    # Seed fixtures directory; None -> fixtures shipped with the package
    SEED_DATA_DIR = os.getenv("SEED_DATA_DIR") or None

    # Document classification: "keyword" (deterministic) or "random"
    CLASSIFIER = os.getenv("CLASSIFIER", "keyword")
    CLASSIFIER_SEED = int(os.environ["CLASSIFIER_SEED"]) if os.getenv("CLASSIFIER_SEED") else None

    # Uploads
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))  # 10 MB

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Rate limiting (Flask-Limiter, in-process storage)
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    UPLOAD_RATE_LIMIT = os.getenv("UPLOAD_RATE_LIMIT", "30/minute")
    WRITE_RATE_LIMIT = os.getenv("WRITE_RATE_LIMIT", "120/minute")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DATABASE_URL = "sqlite://"
    CLASSIFIER = "keyword"
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")  # Must be set explicitly in production

    def __init__(self):
        if not os.getenv("SECRET_KEY"):
            raise RuntimeError("SECRET_KEY environment variable must be set in production")


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
