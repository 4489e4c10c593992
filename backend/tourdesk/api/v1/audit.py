from flask import request, jsonify
from tourdesk.models.audit_log import AuditLog
from tourdesk.normalizers.audit import normalize_audit_log
from tourdesk.normalizers.pagination import normalize_pagination
from tourdesk.utils.decorators import admin_required
from tourdesk.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit", methods=["GET"])
@admin_required
def list_audit_logs():
    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        limit=parse_limit(request.args.get("limit")),
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=meta)), 200
