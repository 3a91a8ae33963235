"""
Document Blueprint.

Endpoints:
    GET   /api/documents                 - list (newest upload first)
    GET   /api/documents/search?q=&type= - filtered projections
    GET   /api/documents/<doc_id>        - single document
    POST  /api/documents                 - create from JSON
    POST  /api/documents/upload          - multipart upload + classification
    PATCH /api/documents/<doc_id>        - update status / content

Layer contract:
    - Validation and persistence live in document_service / schemas.
    - ValidationError and NotFoundError propagate to the app error handlers.
"""

import logging

from flask import Blueprint, jsonify, request

from transitdocs.services import document_service
from transitdocs.utils.errors import E, api_error
from transitdocs.utils.helpers import (
    get_classifier,
    get_or_404,
    get_search_engine,
    get_stats,
    get_store,
    json_body,
)

logger = logging.getLogger(__name__)

documents_bp = Blueprint("documents", __name__, url_prefix="/api/documents")


@documents_bp.route("", methods=["GET"])
def list_documents():
    docs = get_store().list("documents")
    return jsonify([d.to_dict() for d in docs]), 200


@documents_bp.route("/search", methods=["GET"])
def search_documents():
    """Search documents.

    Query params:
        q (str, optional): case-insensitive substring of title or summary.
        type (str, optional): maintenance|safety|finance|hr|all.

    An unknown type matches nothing and yields an empty list.
    """
    query = request.args.get("q", "", type=str)
    type_filter = request.args.get("type", "", type=str) or None

    results = get_search_engine().search(query, type_filter)
    return jsonify([r.to_dict() for r in results]), 200


@documents_bp.route("/<doc_id>", methods=["GET"])
def get_document(doc_id):
    doc, err = get_or_404("documents", doc_id, "Document")
    if err:
        return err
    return jsonify(doc.to_dict()), 200


@documents_bp.route("", methods=["POST"])
def create_document():
    """Create a document.

    Body (JSON):
        title, department, summary (str, required)
        type (str, required): maintenance|safety|finance|hr
        content (str, optional), status (str, optional): active|archived
    """
    doc = document_service.create_document(get_store(), get_stats(), json_body())
    return jsonify(doc.to_dict()), 201


@documents_bp.route("/upload", methods=["POST"])
def upload_document():
    """Upload a file (multipart field ``file``) and classify it."""
    upload = request.files.get("file")
    if upload is None:
        return api_error(E.VALIDATION_REQUIRED, "No file uploaded", details={"file": "is required."})

    content = upload.read()
    result = document_service.upload_document(
        get_store(), get_stats(), get_classifier(), upload.filename, content,
    )
    return jsonify({
        "document": result["document"].to_dict(),
        "processing": result["processing"],
    }), 201


@documents_bp.route("/<doc_id>", methods=["PATCH"])
def update_document(doc_id):
    """Patch a document. Body (JSON): status and/or content."""
    doc = document_service.update_document(get_store(), doc_id, json_body())
    return jsonify(doc.to_dict()), 200
