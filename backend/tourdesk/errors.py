from flask import jsonify
from tourdesk.domain.invariants.exceptions import (
    EntityNotFound,
    InvariantViolation,
    SlugConflict,
)


def _error_response(error, status_code):
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error)
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(SlugConflict)
    def handle_slug_conflict(error):
        return _error_response(error, 409)

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response(error, 400)

    @app.errorhandler(EntityNotFound)
    def handle_not_found(error):
        return _error_response(error, 404)
