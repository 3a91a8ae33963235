"""
Stats Blueprint.

Endpoints:
    GET /api/stats - {metric: integer}
"""

from flask import Blueprint, jsonify

from transitdocs.utils.helpers import get_stats

stats_bp = Blueprint("stats", __name__, url_prefix="/api/stats")


@stats_bp.route("", methods=["GET"])
def get_stats_map():
    return jsonify(get_stats().get_all()), 200
