import os

from flask import Flask, abort, current_app, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .api.v1 import v1_bp
from .commands import register_commands
from .config import config_by_name
from .errors import register_error_handlers
from .extensions import db, jwt, migrate

OPENAPI_URL = "/openapi/tours.yaml"
SWAGGER_URL = "/swagger"


def create_app(config_name: str = "development", config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # API, errors, CLI
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Public files: bucket objects and the API document
    # -------------------------------------------------
    @app.route("/media/<bucket>/<path:path>", methods=["GET"], endpoint="media")
    def serve_media(bucket, path):
        if bucket not in current_app.config["STORAGE_BUCKETS"]:
            abort(404)

        upload_folder = os.path.abspath(current_app.config["UPLOAD_FOLDER"])
        return send_from_directory(os.path.join(upload_folder, bucket), path)

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_tours")
    def serve_openapi():
        return send_from_directory(
            os.path.join(current_app.root_path, "api", "v1"),
            "tours_openapi.yaml",
            mimetype="application/yaml",
        )

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "Tourdesk Admin API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
