from flask import request, jsonify
from tourdesk.application.tours.check_slug import is_slug_available
from tourdesk.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/rpc/check_tour_slug_available", methods=["POST"])
@admin_required
def check_tour_slug_available():
    data = request.get_json(silent=True) or {}

    slug = data.get("p_slug")
    if not isinstance(slug, str):
        return jsonify({"error": "p_slug is required"}), 400

    available = is_slug_available(slug=slug, exclude_tour_id=data.get("p_tour_id"))
    return jsonify({"available": available}), 200
