"""
Shared pytest fixtures for the Transit Document Desk test suite.

Provides:
    - app: Flask application with a freshly seeded record store (per test)
    - client: Flask test client
    - store: the app's RecordStore
    - seeded_store: standalone RecordStore loaded from the shipped fixtures
    - empty_store: standalone RecordStore with no records
    - seed_dir: temp copy of the fixtures, safe to corrupt
"""

import shutil

import pytest

from transitdocs import create_app
from transitdocs.store import RecordStore, load_seed_data
from transitdocs.store.seed import DEFAULT_SEED_DIR
from transitdocs.utils import helpers


# ── App fixtures ─────────────────────────────────────────────────────────


@pytest.fixture()
def app():
    """Create the Flask application; every test starts from the seed data."""
    application = create_app("testing")
    yield application
    application.extensions[helpers.STORE_KEY].dispose()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.extensions[helpers.STORE_KEY]


# ── Standalone store fixtures ────────────────────────────────────────────


@pytest.fixture()
def empty_store():
    s = RecordStore()
    yield s
    s.dispose()


@pytest.fixture()
def seeded_store(empty_store):
    load_seed_data(empty_store)
    return empty_store


@pytest.fixture()
def seed_dir(tmp_path):
    """Writable copy of the shipped seed fixtures."""
    target = tmp_path / "seed"
    shutil.copytree(DEFAULT_SEED_DIR, target)
    return target
