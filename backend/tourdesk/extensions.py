from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

# JTIs of tokens revoked through /auth/logout
revoked_tokens: set[str] = set()


@jwt.token_in_blocklist_loader
def is_token_revoked(jwt_header, jwt_payload) -> bool:
    return jwt_payload["jti"] in revoked_tokens


@jwt.user_lookup_loader
def load_user(jwt_header, jwt_payload):
    from tourdesk.models.user import User

    return db.session.get(User, jwt_payload["sub"])
