from flask import g, jsonify, request
from tourdesk.extensions import db
from tourdesk.models.user import USER_ROLES, User
from tourdesk.normalizers.user import normalize_user
from tourdesk.utils.audit import log_action
from tourdesk.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc()).all()
    return jsonify([normalize_user(user) for user in users]), 200


@v1_bp.route("/users/<user_id>/role", methods=["PUT"])
@admin_required
def assign_role(user_id):
    data = request.get_json(silent=True) or {}
    role = data.get("role")

    if role not in USER_ROLES:
        return jsonify({"error": f"role must be one of {', '.join(USER_ROLES)}"}), 400

    user = db.session.get(User, user_id)
    if user is None:
        return jsonify({"error": "User not found"}), 404

    if user.id == g.current_user.id and role != "admin":
        return jsonify({"error": "You cannot remove your own admin role"}), 400

    previous = user.role
    user.role = role

    log_action(
        action="user.role",
        entity_type="user",
        entity_id=user.id,
        payload={"from": previous, "to": role},
    )
    db.session.commit()

    return jsonify(normalize_user(user)), 200
