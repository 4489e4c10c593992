from flask import g, request, jsonify
from tourdesk.application.inquiries.update_status import inquiry_model, update_inquiry_status
from tourdesk.normalizers.inquiry import normalize_inquiry
from tourdesk.normalizers.pagination import normalize_pagination
from tourdesk.utils.decorators import admin_required
from tourdesk.utils.pagination import MAX_PAGE_SIZE
from . import v1_bp


@v1_bp.route("/inquiries/<kind>", methods=["GET"])
@admin_required
def list_inquiries(kind):
    model = inquiry_model(kind)

    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), MAX_PAGE_SIZE)

    query = model.query
    if status := request.args.get("status"):
        query = query.filter_by(status=status)

    pagination = query.order_by(model.submitted_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify(
        normalize_pagination(
            pagination.items,
            lambda inquiry: normalize_inquiry(inquiry, kind),
            page=page_num,
            per_page=per_page,
            total=pagination.total,
        )
    )


@v1_bp.route("/inquiries/<kind>/<inquiry_id>", methods=["PATCH"])
@admin_required
def update_inquiry(kind, inquiry_id):
    data = request.get_json(silent=True) or {}

    status = data.get("status")
    if not status:
        return jsonify({"error": "status is required"}), 400

    inquiry = update_inquiry_status(
        kind=kind,
        inquiry_id=inquiry_id,
        status=status,
        admin_notes=data.get("admin_notes"),
        actor_id=g.current_user.id,
    )
    return jsonify(normalize_inquiry(inquiry, kind)), 200
