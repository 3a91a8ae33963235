"""
QR Code Blueprint - maintenance job cards.

Endpoints:
    GET   /api/qr-codes            - all job cards (newest first)
    GET   /api/qr-codes/<code>     - lookup by printed code
    POST  /api/qr-codes            - create job card
    PATCH /api/qr-codes/<qr_id>    - partial update by id
    POST  /api/qr-scan/simulate    - random known job card, as if scanned
"""

import logging

from flask import Blueprint, jsonify

from transitdocs.models.schemas import QrCodePatch, clean_qr_code_payload
from transitdocs.services import qr_service
from transitdocs.utils.errors import E, api_error
from transitdocs.utils.helpers import get_store, json_body

logger = logging.getLogger(__name__)

qr_bp = Blueprint("qr_codes", __name__, url_prefix="/api")


@qr_bp.route("/qr-codes", methods=["GET"])
def list_qr_codes():
    codes = get_store().list("qr_codes")
    return jsonify([c.to_dict() for c in codes]), 200


@qr_bp.route("/qr-codes/<code>", methods=["GET"])
def get_qr_code(code):
    qr = qr_service.get_by_code(get_store(), code)
    if qr is None:
        return api_error(E.NOT_FOUND, "QR code not found")
    return jsonify(qr.to_dict()), 200


@qr_bp.route("/qr-codes", methods=["POST"])
def create_qr_code():
    """Create a job card.

    Body (JSON):
        code, title, equipment, description (str, required)
        status (str, optional): pending|in_progress|completed
    """
    payload = clean_qr_code_payload(json_body())
    qr = get_store().create("qr_codes", payload)
    logger.info("QR code created id=%s code=%s", qr.id, qr.code)
    return jsonify(qr.to_dict()), 201


@qr_bp.route("/qr-codes/<qr_id>", methods=["PATCH"])
def update_qr_code(qr_id):
    """Partial update. Mutable: title, equipment, description, status."""
    patch = QrCodePatch.from_payload(json_body())
    qr = get_store().update("qr_codes", qr_id, patch)
    if qr is None:
        return api_error(E.NOT_FOUND, "QR code not found")
    return jsonify(qr.to_dict()), 200


@qr_bp.route("/qr-scan/simulate", methods=["POST"])
def simulate_scan():
    return jsonify(qr_service.simulate_scan(get_store())), 200
