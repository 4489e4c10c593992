from flask import g, request, jsonify
from tourdesk.application.catalog.save_category import delete_category, save_category
from tourdesk.domain.categories import group_categories
from tourdesk.models.category import Category
from tourdesk.normalizers.category import normalize_category
from tourdesk.utils.decorators import admin_required
from . import v1_bp


def _category_query():
    query = Category.query
    if request.args.get("active", "").lower() in ("1", "true", "yes"):
        query = query.filter(Category.is_active.is_(True))
    return query


@v1_bp.route("/categories", methods=["GET"])
@admin_required
def list_categories():
    order = Category.name.asc() if request.args.get("order") == "name" else Category.display_order.asc()
    categories = _category_query().order_by(order, Category.name.asc()).all()
    return jsonify([normalize_category(c) for c in categories])


@v1_bp.route("/categories/grouped", methods=["GET"])
@admin_required
def list_grouped_categories():
    categories = _category_query().order_by(Category.display_order.asc(), Category.name.asc()).all()
    return jsonify(group_categories([normalize_category(c) for c in categories]))


@v1_bp.route("/categories", methods=["POST"])
@admin_required
def create_category():
    category = save_category(actor_id=g.current_user.id, data=request.get_json(silent=True) or {})
    return jsonify(normalize_category(category)), 201


@v1_bp.route("/categories/<category_id>", methods=["PUT", "PATCH"])
@admin_required
def update_category(category_id):
    category = save_category(
        actor_id=g.current_user.id,
        data=request.get_json(silent=True) or {},
        category_id=category_id,
    )
    return jsonify(normalize_category(category)), 200


@v1_bp.route("/categories/<category_id>", methods=["DELETE"])
@admin_required
def delete_category_route(category_id):
    delete_category(category_id=category_id, actor_id=g.current_user.id)
    return jsonify({"message": "Category deleted"}), 200
