from tourdesk.models.user import User

ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."


class AuthenticationError(Exception):
    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


def authenticate_admin(email: str, password: str) -> User:
    """
    Resolve an admin user from credentials.

    Non-admin users are rejected even with a correct password, so no session
    is ever handed out to them.
    """
    if not email or not password:
        raise AuthenticationError("Email and password required", 400)

    user = User.query.filter_by(email=email.strip().lower()).first()

    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid credentials", 401)

    if not user.is_active:
        raise AuthenticationError("User account disabled", 403)

    if not user.is_admin:
        raise AuthenticationError(ADMIN_REQUIRED_MESSAGE, 403)

    return user
