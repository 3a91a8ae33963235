"""Shared blueprint helpers.

The store and the engines layered on it are created once per application
in ``create_app`` and kept in ``app.extensions``; views reach them through
these accessors instead of importing module-level singletons.
"""
import logging

from flask import current_app, request

from transitdocs.core.exceptions import ValidationError
from transitdocs.utils.errors import E, api_error

logger = logging.getLogger(__name__)

STORE_KEY = "record_store"
STATS_KEY = "stats_aggregator"
WORKFLOW_KEY = "workflow_engine"
SEARCH_KEY = "search_engine"
CLASSIFIER_KEY = "document_classifier"


def get_store():
    return current_app.extensions[STORE_KEY]


def get_stats():
    return current_app.extensions[STATS_KEY]


def get_workflow_engine():
    return current_app.extensions[WORKFLOW_KEY]


def get_search_engine():
    return current_app.extensions[SEARCH_KEY]


def get_classifier():
    return current_app.extensions[CLASSIFIER_KEY]


def json_body() -> dict:
    """Parsed JSON object body, or ValidationError for anything else."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def get_or_404(collection: str, record_id: str, label: str):
    """Fetch a record from the store or return a 404 error tuple.

    Tuple-return pattern:
        doc, err = get_or_404("documents", doc_id, "Document")
        if err:
            return err
    """
    record = get_store().get(collection, record_id)
    if record is None:
        return None, api_error(E.NOT_FOUND, f"{label} not found")
    return record, None
