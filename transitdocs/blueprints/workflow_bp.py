"""
Workflow Blueprint.

Endpoints:
    GET   /api/workflow                  - all items (newest submission first)
    GET   /api/workflow/pending          - items not yet complete
    GET   /api/workflow/<item_id>        - single item + available actions
    POST  /api/workflow                  - create item
    PATCH /api/workflow/<item_id>        - partial update (any known stage)
    POST  /api/workflow/<item_id>/approve - advance one stage
    POST  /api/workflow/<item_id>/reject  - back to submitted
"""

import logging

from flask import Blueprint, jsonify

from transitdocs.models.schemas import WorkflowItemPatch, clean_workflow_item_payload
from transitdocs.services.workflow_engine import WorkflowEngine
from transitdocs.utils.errors import E, api_error
from transitdocs.utils.helpers import get_or_404, get_store, get_workflow_engine, json_body

logger = logging.getLogger(__name__)

workflow_bp = Blueprint("workflow", __name__, url_prefix="/api/workflow")


@workflow_bp.route("", methods=["GET"])
def list_workflow_items():
    items = get_store().list("workflow_items")
    return jsonify([i.to_dict() for i in items]), 200


@workflow_bp.route("/pending", methods=["GET"])
def list_pending_items():
    items = get_workflow_engine().pending_items()
    return jsonify({"items": [i.to_dict() for i in items], "total": len(items)}), 200


@workflow_bp.route("/<item_id>", methods=["GET"])
def get_workflow_item(item_id):
    item, err = get_or_404("workflow_items", item_id, "Workflow item")
    if err:
        return err
    return jsonify({**item.to_dict(), "available_actions": WorkflowEngine.available_actions(item)}), 200


@workflow_bp.route("", methods=["POST"])
def create_workflow_item():
    """Create a workflow item.

    Body (JSON):
        title, description, department (str, required)
        current_stage (str, optional): submitted|review|approved|complete
        priority (str, optional): normal|urgent
    """
    payload = clean_workflow_item_payload(json_body())
    item = get_store().create("workflow_items", payload)
    logger.info("Workflow item created id=%s stage=%s", item.id, item.current_stage)
    return jsonify(item.to_dict()), 201


@workflow_bp.route("/<item_id>", methods=["PATCH"])
def update_workflow_item(item_id):
    """Partial update. Mutable: title, description, department, current_stage, priority."""
    patch = WorkflowItemPatch.from_payload(json_body())
    item = get_store().update("workflow_items", item_id, patch)
    if item is None:
        return api_error(E.NOT_FOUND, "Workflow item not found")
    return jsonify(item.to_dict()), 200


@workflow_bp.route("/<item_id>/approve", methods=["POST"])
def approve_workflow_item(item_id):
    item = get_workflow_engine().approve(item_id)
    return jsonify(item.to_dict()), 200


@workflow_bp.route("/<item_id>/reject", methods=["POST"])
def reject_workflow_item(item_id):
    item = get_workflow_engine().reject(item_id)
    return jsonify(item.to_dict()), 200
