from flask import g, request, jsonify
from tourdesk.application.site.update_site_content import get_site_content, update_site_content
from tourdesk.utils.decorators import admin_required
from . import v1_bp


def _serialize(content):
    return {
        "element_key": content.element_key,
        "content_value": content.content_value or {},
        "updated_at": content.updated_at.isoformat() if content.updated_at else None,
    }


@v1_bp.route("/site-content/<element_key>", methods=["GET"])
@admin_required
def read_site_content(element_key):
    return jsonify(_serialize(get_site_content(element_key)))


@v1_bp.route("/site-content/<element_key>", methods=["PUT"])
@admin_required
def write_site_content(element_key):
    data = request.get_json(silent=True) or {}
    content = update_site_content(
        element_key=element_key,
        changes=data.get("content_value"),
        actor_id=g.current_user.id,
    )
    return jsonify(_serialize(content)), 200
