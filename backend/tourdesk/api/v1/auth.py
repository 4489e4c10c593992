from flask import request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    get_jwt,
    jwt_required,
)
from tourdesk.application.auth.sign_in import AuthenticationError, authenticate_admin
from tourdesk.extensions import revoked_tokens
from tourdesk.normalizers.user import normalize_user
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    try:
        user = authenticate_admin(data.get("email"), data.get("password"))
    except AuthenticationError as exc:
        return jsonify({"error": str(exc)}), exc.status_code

    claims = {"role": user.role}

    access_token = create_access_token(identity=user.id, additional_claims=claims)
    refresh_token = create_refresh_token(identity=user.id, additional_claims=claims)

    return jsonify({
        "access_token": access_token,
        "refresh_token": refresh_token,
        "user": normalize_user(user),
    }), 200


@v1_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def logout():
    revoked_tokens.add(get_jwt()["jti"])
    return jsonify({"message": "Signed out"}), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify(normalize_user(get_current_user())), 200
