from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_current_user, get_jwt, verify_jwt_in_request


def roles_required(*allowed_roles):
    """
    Require a valid access token whose role claim is one of ``allowed_roles``.

    The resolved user is exposed as ``g.current_user`` for audit logging.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()

            if get_jwt().get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            user = get_current_user()
            if user is None or not user.is_active:
                return jsonify({"error": "User account disabled"}), 403

            g.current_user = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator


admin_required = roles_required("admin")
